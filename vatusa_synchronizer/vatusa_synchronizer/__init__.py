"""
This module coordinates the synchronization of a facility's local users
with its VATUSA roster. The main class is `VatusaSynchronizer`, found in
the `vatusa_synchronizer` submodule. It fetches the roster once and
hands it to two "delegate" classes, found in the `delegates` submodule,
each of which subclasses the `SyncDelegate` interface:

    - `MemberDelegate` creates and updates local users from the roster.
    - `StaffDelegate` assigns the staff groups.
"""


from .vatusa_synchronizer import SyncSummary, VatusaSynchronizer
