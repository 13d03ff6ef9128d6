"""
This module contains class definitions for the "delegate" classes for
use in the `vatusa_synchronizer` parent module. Each delegate applies
one part of the fetched VATUSA roster to the local user store:

`MemberDelegate` creates and updates local users from the roster
members.

`StaffDelegate` moves the holders of the facility staff positions into
their staff groups.

See the documentation for each class for more information about the
specifics of their routines.
"""
from .base_delegate import SyncDelegate
from .member_delegate import MemberDelegate
from .staff_delegate import StaffDelegate, STAFF_ROLES
