"""Client for the external comment classification backend."""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from comment_miner.core.errors import ClassifierError
from comment_miner.db.helpers import BATCH_ADAPTER
from comment_miner.models import CommentBatch, CommentRecord

logger = logging.getLogger(__name__)

_RECORDS_ADAPTER: TypeAdapter[list[CommentRecord]] = TypeAdapter(list[CommentRecord])

SINGLE_FILE_ROUTE = "/executeClassifyOfSingleFile"
ALL_FILES_ROUTE = "/executeClassifyOfAllFiles"


class HttpCommentClassifier:
    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _post(self, route: str, payload: bytes) -> bytes:
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(route, content=payload, headers={"Content-Type": "application/json"})
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise ClassifierError(f"Classification request to {self._base_url}{route} failed: {exc}") from exc
        return response.content

    async def classify_file(self, records: list[CommentRecord]) -> list[CommentRecord]:
        if not records:
            return []
        logger.info("Sending %d comment(s) for classification", len(records))
        body = await self._post(SINGLE_FILE_ROUTE, _RECORDS_ADAPTER.dump_json(records, by_alias=True))
        try:
            return _RECORDS_ADAPTER.validate_json(body)
        except ValidationError as exc:
            raise ClassifierError(f"Unexpected classification response: {exc}") from exc

    async def classify_all(self, batch: CommentBatch) -> CommentBatch:
        logger.info("Sending %d file(s) for classification", len(batch))
        body = await self._post(ALL_FILES_ROUTE, BATCH_ADAPTER.dump_json(batch, by_alias=True))
        try:
            return BATCH_ADAPTER.validate_json(body)
        except ValidationError as exc:
            raise ClassifierError(f"Unexpected classification response: {exc}") from exc
