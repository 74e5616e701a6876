"""Activity ledger - work items and their action timelines for one run."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class WorkItemKind(Enum):
    """Whether a work item is an issue or a pull request."""

    ISSUE = "issue"
    PULL_REQUEST = "pull request"


class ObjectKind(Enum):
    """What an action was performed on."""

    ISSUE = "issue"
    ISSUE_COMMENT = "issue comment"
    PULL_REQUEST = "pull request"
    PULL_REQUEST_COMMENT = "pull request comment"


@dataclass
class WorkItem:
    """An issue or pull request."""

    id: int
    kind: WorkItemKind
    url: str
    title: str
    description: str  # summarized body
    is_author: bool


@dataclass
class Action:
    """One thing the tracked user did to a work item."""

    action: str  # opened, closed, merged, created, ...
    object: ObjectKind
    content: str  # summarized body


class ActivityLedger:
    """
    In-memory aggregate of work items and their actions.

    Issues and pull requests share GitHub's numbering, so one id-keyed map
    holds both and an id can only ever have one kind. Work items are
    first-write-wins: later sightings never change a stored record.

    Not safe for concurrent mutation.
    """

    def __init__(self, tracked_user: str):
        self.tracked_user = tracked_user
        self._items: dict[int, WorkItem] = {}
        self._actions: dict[int, list[Action]] = {}

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def upsert_work_item(self, item: WorkItem) -> bool:
        """Store a work item unless its id is already known. Returns True if stored."""
        if item.id in self._items:
            return False
        self._items[item.id] = item
        return True

    def append_action(self, item_id: int, action: Action) -> None:
        """Append to the item's timeline, in arrival order."""
        self._actions.setdefault(item_id, []).append(action)

    def lookup(self, item_id: int) -> WorkItem | None:
        """Get a work item by id. Returns None if unknown."""
        return self._items.get(item_id)

    def actions(self, item_id: int) -> list[Action]:
        """Timeline for a work item (empty if none)."""
        return list(self._actions.get(item_id, []))

    def _of_kind(self, kind: WorkItemKind) -> Iterator[WorkItem]:
        return (item for item in list(self._items.values()) if item.kind is kind)

    def all_issues(self) -> Iterator[WorkItem]:
        """Lazily yield every issue. Order is not guaranteed."""
        return self._of_kind(WorkItemKind.ISSUE)

    def all_pulls(self) -> Iterator[WorkItem]:
        """Lazily yield every pull request. Order is not guaranteed."""
        return self._of_kind(WorkItemKind.PULL_REQUEST)
