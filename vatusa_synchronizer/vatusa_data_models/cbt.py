from dataclasses import dataclass, field
from typing import List, Optional

from .utils import parse_bool, parse_int, require, require_list
from ..exceptions import MalformedResponseError


@dataclass
class CbtChapter(object):
    id: int
    order: int
    name: str
    url: Optional[str] = None
    block_id: Optional[int] = None

    @classmethod
    def from_json(cls, json_obj: dict) -> 'CbtChapter':
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('CBT chapter is not an object',
                                         json_obj)
        block_id = json_obj.get('blockId')
        return cls(
            id=parse_int(require(json_obj, 'id'), 'id'),
            order=parse_int(require(json_obj, 'order'), 'order'),
            name=require(json_obj, 'name'),
            url=json_obj.get('url'),
            block_id=(parse_int(block_id, 'blockId')
                      if block_id is not None else None)
        )


@dataclass
class CbtBlock(object):

    """
    A CBT block. Listings from `/cbt/block` carry `order` and
    `visible` but no chapters; a single block fetched by ID carries
    its chapters but neither of the others.
    """

    id: int
    name: str
    order: Optional[int] = None
    visible: Optional[bool] = None
    chapters: List[CbtChapter] = field(default_factory=list)

    @classmethod
    def from_json(cls, json_obj: dict) -> 'CbtBlock':
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('CBT block is not an object',
                                         json_obj)
        order = json_obj.get('order')
        visible = json_obj.get('visible')
        return cls(
            id=parse_int(require(json_obj, 'id'), 'id'),
            name=require(json_obj, 'name'),
            order=parse_int(order, 'order') if order is not None else None,
            visible=(parse_bool(visible, 'visible')
                     if visible is not None else None)
        )

    @classmethod
    def from_block_response(cls, json_obj: dict) -> 'CbtBlock':
        """Parses the body of `/cbt/block/{id}`."""
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('CBT block is not an object',
                                         json_obj)
        return cls(
            id=parse_int(require(json_obj, 'blockId'), 'blockId'),
            name=require(json_obj, 'blockName'),
            chapters=[CbtChapter.from_json(c)
                      for c in require_list(json_obj, 'chapters')]
        )
