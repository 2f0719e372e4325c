"""Jellyfin implementations of the host library services."""

import logging
from typing import List, Optional

from random_sample.errors import HostServiceError
from .base import BaseDtoService, BaseLibraryManager, DtoOptions, HostUser, Item, ItemsQuery
from .jellyfin_client import JellyfinClient


logger = logging.getLogger(__name__)

# Item type of a top-level library node
COLLECTION_FOLDER = "CollectionFolder"

VIRTUAL_LOCATION = "Virtual"

# Ids per conversion call; keeps the query string under host URL limits
DTO_BATCH_SIZE = 100


class JellyfinLibraryManager(BaseLibraryManager):
    """Library traversal backed by the Jellyfin REST API.

    Visibility is enforced by the host: every call passes the requesting
    user's id and token, so items the user cannot see are never returned.
    """

    def __init__(self, client: JellyfinClient):
        self.client = client

    def get_user(self, token: str) -> HostUser:
        data = self.client.get_json("/Users/Me", token)
        if not isinstance(data, dict) or not data.get("Id"):
            raise HostServiceError("Media server returned no user for token")
        return HostUser(id=data["Id"], name=data.get("Name", ""), token=token)

    def get_user_libraries(self, user: HostUser) -> List[Item]:
        data = self.client.get_json("/UserViews", user.token, userId=user.id)
        views = data.get("Items", []) if isinstance(data, dict) else []
        libraries = [v for v in views if v.get("Type") == COLLECTION_FOLDER]
        logger.debug(f"User {user.name} sees {len(libraries)} libraries ({len(views)} views)")
        return libraries

    def get_item_by_id(self, item_id: str, user: HostUser) -> Optional[Item]:
        try:
            return self.client.get_json(f"/Items/{item_id}", user.token, userId=user.id)
        except HostServiceError as e:
            # Unknown ids, malformed ids and items hidden from the user
            if e.status_code in (400, 404):
                logger.debug(f"Item {item_id} not resolved for user {user.name}: {e}")
                return None
            raise

    def get_items(self, query: ItemsQuery, user: HostUser) -> List[Item]:
        params = {
            "userId": user.id,
            "parentId": query.parent_id,
            "recursive": str(query.recursive).lower(),
            "includeItemTypes": ",".join(query.include_item_types),
            "enableTotalRecordCount": "false",
            "enableImages": "false",
        }
        if not query.is_virtual_item:
            params["excludeLocationTypes"] = VIRTUAL_LOCATION
        if query.limit is not None:
            params["limit"] = query.limit

        data = self.client.get_json("/Items", user.token, **params)
        if not isinstance(data, dict):
            raise HostServiceError("Unexpected item query response from media server")

        items = data.get("Items", [])
        if not query.is_virtual_item:
            items = [i for i in items if i.get("LocationType") != VIRTUAL_LOCATION]

        logger.debug(
            f"Library {query.parent_id}: {len(items)} items "
            f"(types={query.include_item_types}, limit={query.limit})"
        )
        return items


class JellyfinDtoService(BaseDtoService):
    """Item conversion backed by the Jellyfin REST API.

    Conversion re-reads the items with the requested fields so the
    returned DTOs carry the full descriptive payload. Ids are sent in
    batches of batch_size so the query string stays bounded whatever the
    sample size.
    """

    def __init__(self, client: JellyfinClient, batch_size: int = DTO_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.client = client
        self.batch_size = batch_size

    def _fetch(self, ids: List[str], options: DtoOptions, user: HostUser) -> List[Item]:
        data = self.client.get_json(
            "/Items",
            user.token,
            userId=user.id,
            ids=",".join(ids),
            fields=",".join(options.fields),
        )
        if not isinstance(data, dict):
            raise HostServiceError("Unexpected conversion response from media server")
        return data.get("Items", [])

    def get_base_item_dto(self, item: Item, options: DtoOptions, user: HostUser) -> Item:
        dtos = self._fetch([item["Id"]], options, user)
        if not dtos:
            raise HostServiceError(f"Media server returned no DTO for item {item['Id']}")
        return dtos[0]

    def get_base_item_dtos(
        self,
        items: List[Item],
        options: DtoOptions,
        user: HostUser
    ) -> List[Item]:
        if not items:
            return []

        ids = [item["Id"] for item in items]
        by_id = {}
        for start in range(0, len(ids), self.batch_size):
            batch = ids[start:start + self.batch_size]
            by_id.update((dto.get("Id"), dto) for dto in self._fetch(batch, options, user))

        dtos = []
        for item_id in ids:
            dto = by_id.get(item_id)
            if dto is None:
                logger.warning(f"Item {item_id} disappeared before conversion; skipping")
                continue
            dtos.append(dto)
        return dtos
