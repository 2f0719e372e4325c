"""Base classes for host library services."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Host item representations are the JSON objects the media server returns
Item = Dict[str, Any]


@dataclass(frozen=True)
class HostUser:
    """The user a request runs as.

    All host calls made on behalf of a request carry this user's token,
    so visibility rules are enforced by the host.
    """
    id: str
    name: str
    token: str = field(repr=False)


@dataclass
class ItemsQuery:
    """Recursive item query under a parent node."""
    parent_id: str
    include_item_types: List[str]
    recursive: bool = True
    is_virtual_item: bool = False
    limit: Optional[int] = 1000


@dataclass
class DtoOptions:
    """Descriptive fields requested from the conversion service."""
    fields: Tuple[str, ...] = ()


class BaseLibraryManager(ABC):
    """Abstract base class for the host's library and item store.

    Implementations resolve users, library nodes and item queries. They
    raise HostServiceError for host faults and HostAuthError when the
    host rejects the caller's token.
    """

    @abstractmethod
    def get_user(self, token: str) -> HostUser:
        """Resolve the user owning an access token.

        Args:
            token: Access token presented by the caller

        Returns:
            HostUser for the token

        Raises:
            HostAuthError: If the host rejects the token
            HostServiceError: If the host call fails
        """
        pass

    @abstractmethod
    def get_user_libraries(self, user: HostUser) -> List[Item]:
        """List the top-level libraries (collection folders) visible to a user."""
        pass

    @abstractmethod
    def get_item_by_id(self, item_id: str, user: HostUser) -> Optional[Item]:
        """Resolve an item by id.

        Args:
            item_id: Host-assigned item identifier
            user: User the lookup runs as

        Returns:
            The item, or None if it does not exist or is not visible to user

        Raises:
            HostServiceError: If the host call fails for another reason
        """
        pass

    @abstractmethod
    def get_items(self, query: ItemsQuery, user: HostUser) -> List[Item]:
        """Run an item query.

        Args:
            query: Parent, type filter and limit
            user: User the query runs as

        Returns:
            Matching items, at most query.limit of them

        Raises:
            HostServiceError: If the query fails
        """
        pass


class BaseDtoService(ABC):
    """Abstract base class for the host's item-to-DTO conversion."""

    @abstractmethod
    def get_base_item_dto(self, item: Item, options: DtoOptions, user: HostUser) -> Item:
        """Convert one item to its transfer representation."""
        pass

    def get_base_item_dtos(
        self,
        items: List[Item],
        options: DtoOptions,
        user: HostUser
    ) -> List[Item]:
        """Convert items to transfer representations, preserving order.

        Note:
            Subclasses may override this to convert in a single host call
        """
        return [self.get_base_item_dto(item, options, user) for item in items]
