"""Nodes of a document tree, the lists that hold them and documents."""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import Iterable, Iterator, Optional

from domkit.events import Event, EventTarget


class NodeType(IntEnum):
    """Numeric kind of a node."""

    ELEMENT_NODE = 1
    ATTRIBUTE_NODE = 2
    TEXT_NODE = 3
    CDATA_SECTION_NODE = 4
    ENTITY_REFERENCE_NODE = 5
    ENTITY_NODE = 6
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10
    DOCUMENT_FRAGMENT_NODE = 11
    NOTATION_NODE = 12


class DocumentPosition(IntFlag):
    """Bits describing where one node lies relative to another."""

    DISCONNECTED = 0x01
    PRECEDING = 0x02
    FOLLOWING = 0x04
    CONTAINS = 0x08
    CONTAINED_BY = 0x10
    IMPLEMENTATION_SPECIFIC = 0x20


class NodeList:
    """An ordered collection of nodes."""

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self.nodes: list[Node] = list(nodes)

    def item(self, index: int) -> Optional[Node]:
        """Return the node at *index*, or None when there is none."""
        if 0 <= index < len(self.nodes):
            return self.nodes[index]
        return None

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]


class Node(EventTarget):
    """A node in a document tree."""

    def __init__(
        self,
        node_type: NodeType,
        node_name: str = "",
        owner_document: Optional[Document] = None,
    ) -> None:
        super().__init__()
        self.node_type = NodeType(node_type)
        self.node_name = node_name
        self.node_document: Optional[Document] = owner_document
        self.parent_node: Optional[Node] = None
        self.child_nodes = NodeList()
        self.node_value: Optional[str] = None
        self.text_content: Optional[str] = None

    @property
    def owner_document(self) -> Optional[Document]:
        return self.node_document

    @property
    def base_uri(self) -> str:
        document = self.node_document
        return document.url if document is not None else "about:blank"

    @property
    def first_child(self) -> Optional[Node]:
        return self.child_nodes.item(0)

    @property
    def last_child(self) -> Optional[Node]:
        return self.child_nodes.item(len(self.child_nodes) - 1)

    def _sibling(self, offset: int) -> Optional[Node]:
        parent = self.parent_node
        if parent is None:
            return None
        for position, node in enumerate(parent.child_nodes):
            if node is self:
                return parent.child_nodes.item(position + offset)
        return None

    @property
    def previous_sibling(self) -> Optional[Node]:
        return self._sibling(-1)

    @property
    def next_sibling(self) -> Optional[Node]:
        return self._sibling(1)

    @property
    def is_connected(self) -> bool:
        node = self
        while node.parent_node is not None:
            node = node.parent_node
        return isinstance(node, Document)

    def has_child_nodes(self) -> bool:
        return len(self.child_nodes) > 0

    def get_the_parent(self, event: Event) -> Optional[EventTarget]:
        return self.parent_node

    def _passive_by_default(self) -> bool:
        return self.node_document is self


class Document(Node):
    """The root of a document tree."""

    def __init__(self) -> None:
        super().__init__(NodeType.DOCUMENT_NODE, "#document")
        self.node_document = self
        self.url = "about:blank"
        self.compat_mode = "CSS1Compat"
        self.character_set = "UTF-8"
        self.content_type = "application/xml"
        self.default_view: Optional[EventTarget] = None

    @property
    def owner_document(self) -> Optional[Document]:
        return None

    @property
    def document_uri(self) -> str:
        return self.url

    @property
    def charset(self) -> str:
        return self.character_set

    @property
    def input_encoding(self) -> str:
        return self.character_set

    def get_the_parent(self, event: Event) -> Optional[EventTarget]:
        if event.type == "load":
            return None
        return self.default_view