"""
Pool Module

Append-only slab storage for the in-memory database.

Three flavours are provided:
    - Pool: fixed-size records placed in grow-only blocks
    - StringPool: variable-length strings, with oversize blocks slotted
      behind the tail so the tail keeps its free space
    - IdLinkedList: singly-linked chains of 32-bit ids whose nodes all
      live in one shared Pool

Nothing stored in a pool is ever moved or copied after allocation; the
references handed out stay valid until the pool is cleared, which drops
everything at once.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

# Constants
POOL_DEFAULT_BLOCK_CAPACITY = 1024
STRING_POOL_DEFAULT_BLOCK_CAPACITY = 4096
ID_LINKED_LIST_POOL_BLOCK_CAPACITY = 4096
ID_MAX = 0xFFFFFFFF


class Pool:
    """Grow-only vector of fixed-capacity record blocks."""

    def __init__(self, block_capacity: int = POOL_DEFAULT_BLOCK_CAPACITY):
        if block_capacity <= 0:
            raise ValueError(f"Invalid pool block capacity: {block_capacity}")
        self.block_capacity = block_capacity
        self.blocks: List[List[Any]] = [[]]

    def put(self, item: Any) -> Any:
        """
        Place a record at the tail block's watermark.

        Args:
            item: Record to store

        Returns:
            The stored record (a stable reference until clear())
        """
        tail = self.blocks[-1]
        if len(tail) >= self.block_capacity:
            tail = []
            self.blocks.append(tail)
        tail.append(item)
        return item

    def clear(self):
        """Release every block; all references handed out become dead."""
        self.blocks = [[]]

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    def __len__(self) -> int:
        return sum(len(block) for block in self.blocks)

    def __iter__(self) -> Iterator[Any]:
        for block in self.blocks:
            yield from block


@dataclass
class StringPoolBlock:
    """One block of a string pool."""
    capacity: int = 0
    used: int = 0
    strings: List[str] = None

    def __post_init__(self):
        if self.strings is None:
            self.strings = []


class StringPool:
    """
    Pool for variable-length strings.

    Sizes are measured in UTF-8 bytes plus a terminator byte, so block
    accounting matches what the strings would occupy in a flat buffer.
    """

    def __init__(self, block_capacity: int = STRING_POOL_DEFAULT_BLOCK_CAPACITY,
                 no_duplicates: bool = False):
        if block_capacity <= 0:
            raise ValueError(f"Invalid string pool block capacity: {block_capacity}")
        self.block_capacity = block_capacity
        self.blocks: List[StringPoolBlock] = [StringPoolBlock(block_capacity)]
        self.interned: Optional[Dict[str, str]] = {} if no_duplicates else None

    def put(self, text: str) -> str:
        """
        Store a copy of a string.

        Strings that fit in the tail block go there. Strings longer than a
        whole block get a block of their own, inserted just before the tail.
        Otherwise a fresh tail block is started.

        Args:
            text: String to store

        Returns:
            The pooled string
        """
        if self.interned is not None:
            existing = self.interned.get(text)
            if existing is not None:
                return existing

        size = len(text.encode('utf-8')) + 1
        tail = self.blocks[-1]

        if size > self.block_capacity:
            block = StringPoolBlock(size, size, [text])
            self.blocks.insert(len(self.blocks) - 1, block)
        else:
            if tail.used + size > tail.capacity:
                tail = StringPoolBlock(self.block_capacity)
                self.blocks.append(tail)
            tail.strings.append(text)
            tail.used += size

        if self.interned is not None:
            self.interned[text] = text
        return text

    def clear(self):
        """Release every string at once."""
        self.blocks = [StringPoolBlock(self.block_capacity)]
        if self.interned is not None:
            self.interned = {}

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    def __len__(self) -> int:
        return sum(len(block.strings) for block in self.blocks)


@dataclass
class IdLinkedListNode:
    """Node of an id chain. Nodes are owned by a Pool, never by the list."""
    value: int = 0
    next: Optional['IdLinkedListNode'] = None


def id_linked_list_create_pool() -> Pool:
    """Create the shared node pool for a family of id lists."""
    return Pool(ID_LINKED_LIST_POOL_BLOCK_CAPACITY)


def id_linked_list_append(pool: Pool, head: Optional[IdLinkedListNode],
                          value: int) -> Optional[IdLinkedListNode]:
    """
    Append an id to the end of a chain unless it is already present.

    Args:
        pool: Node pool shared by every list of the owner
        head: First node of the chain (None for an empty chain)
        value: Id to add, 0..2^32-1

    Returns:
        The head of the resulting chain
    """
    if value < 0 or value > ID_MAX:
        raise ValueError(f"Id out of 32-bit range: {value}")

    if head is None:
        return pool.put(IdLinkedListNode(value))

    node = head
    while True:
        if node.value == value:
            return head
        if node.next is None:
            break
        node = node.next

    node.next = pool.put(IdLinkedListNode(value))
    return head


def id_linked_list_iter(head: Optional[IdLinkedListNode]) -> Iterator[int]:
    """Yield the ids of a chain in insertion order."""
    node = head
    while node is not None:
        yield node.value
        node = node.next


def id_linked_list_length(head: Optional[IdLinkedListNode]) -> int:
    count = 0
    node = head
    while node is not None:
        count += 1
        node = node.next
    return count
