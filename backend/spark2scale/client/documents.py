import asyncio
import logging
from dataclasses import dataclass, field

from spark2scale.client.aggregator import aggregate
from spark2scale.client.api import Spark2ScaleAPI
from spark2scale.client.errors import PartialHistoryUnavailable, UpstreamUnavailable
from spark2scale.client.records import DocumentGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentGroupsResult:
    groups: list[DocumentGroup]
    warnings: list[PartialHistoryUnavailable] = field(default_factory=list)


async def _fetch_history(api: Spark2ScaleAPI, raw: dict) -> tuple[list[dict], PartialHistoryUnavailable | None]:
    document_id = raw.get("did") or raw.get("id")
    if not document_id:
        return [], None
    try:
        return await api.get_history(document_id), None
    except UpstreamUnavailable as exc:
        logger.warning("Version history for document %s unavailable: %s", document_id, exc)
        return [], PartialHistoryUnavailable(document_id, raw.get("type"), exc)


async def load_document_groups(api: Spark2ScaleAPI, startup_id: str) -> DocumentGroupsResult:
    """Fetch a startup's documents and their histories, then group them by type.

    Histories are requested concurrently and all of them are awaited before
    grouping. A failed history only empties that document's versions and is
    reported in ``warnings``. A failed document list raises UpstreamUnavailable.
    """
    documents = await api.list_documents(startup_id)
    histories = await asyncio.gather(*(_fetch_history(api, doc) for doc in documents))

    records = []
    warnings = []
    for doc, (versions, warning) in zip(documents, histories):
        if warning is not None:
            warnings.append(warning)
        records.append({**doc, "versions": versions})

    return DocumentGroupsResult(groups=aggregate(records), warnings=warnings)
