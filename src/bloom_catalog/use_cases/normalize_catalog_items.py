"""Normalization of untrusted catalog records into CatalogItem entities."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from bloom_catalog.domain.catalog_item import CatalogItem, ItemStatus, canonical_size
from bloom_catalog.domain.errors import NormalizationRejection

logger = logging.getLogger(__name__)

# Schema drift: the same attribute has shipped under several names
ID_KEYS = ("_id", "id", "uuid", "sku")
NAME_KEYS = ("name", "title", "label")
COLLECTION_KEYS = ("collectionName", "collection_name", "collection")
CUSTOM_TAG_KEYS = ("customTags", "custom_tags", "customPenanda")

# Envelope properties that may carry the record list
ENVELOPE_KEYS = ("data", "bouquets", "items", "results", "content")

MAX_NAME_LENGTH = 200
MAX_TEXT_LENGTH = 2000
MAX_TAG_LENGTH = 100

ZERO = Decimal("0")


def extract_records(payload: Any) -> list[Any]:
    """
    Pull the record list out of a catalog response.

    Accepts a bare list or an object carrying the list under a known
    envelope property (falling back to the first list-valued property).
    Anything else yields an empty list.
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, Mapping):
        for key in ENVELOPE_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
        for value in payload.values():
            if isinstance(value, list):
                return value
        logger.warning(
            "Catalog response has no record list",
            extra={"keys": sorted(str(k) for k in payload.keys())[:20]},
        )

    return []


def normalize_item(raw: Any) -> CatalogItem:
    """
    Convert one raw record into a CatalogItem.

    Raises:
        NormalizationRejection: If the record is not an object or lacks an id or a name
    """
    if not isinstance(raw, Mapping):
        raise NormalizationRejection("record is not an object", record_type=type(raw).__name__)

    item_id = _first_identifier(raw, ID_KEYS)
    name = _first_text(raw, NAME_KEYS, MAX_NAME_LENGTH)

    if not item_id and not name:
        raise NormalizationRejection("missing id and name")
    if not item_id:
        raise NormalizationRejection("missing id", name=name)
    if not name:
        raise NormalizationRejection("missing name", item_id=item_id)

    return CatalogItem(
        id=item_id,
        name=name,
        price=_coerce_price(raw.get("price")),
        description=_text(raw.get("description"), MAX_TEXT_LENGTH),
        type=_text(raw.get("type"), MAX_NAME_LENGTH),
        size=canonical_size(_text(raw.get("size"), MAX_NAME_LENGTH)),
        collection_name=_first_text(raw, COLLECTION_KEYS, MAX_NAME_LENGTH),
        image=_text(raw.get("image"), MAX_TEXT_LENGTH),
        status=_coerce_status(raw.get("status")),
        is_featured=_coerce_bool(raw.get("isFeatured", raw.get("is_featured"))),
        is_new_edition=_coerce_bool(raw.get("isNewEdition", raw.get("is_new_edition"))),
        quantity=_coerce_quantity(raw.get("quantity")),
        occasions=_string_sequence(raw.get("occasions")),
        flowers=_string_sequence(raw.get("flowers")),
        custom_tags=_string_sequence(_first_present(raw, CUSTOM_TAG_KEYS)),
        care_instructions=_text(raw.get("careInstructions", raw.get("care_instructions")), MAX_TEXT_LENGTH) or None,
        created_at=_coerce_datetime(raw.get("createdAt", raw.get("created_at"))),
        updated_at=_coerce_datetime(raw.get("updatedAt", raw.get("updated_at"))),
    )


def try_normalize_item(raw: Any) -> CatalogItem | None:
    try:
        return normalize_item(raw)
    except NormalizationRejection as rejection:
        logger.debug(
            "Catalog record rejected",
            extra={"reason": rejection.reason, "context": rejection.context},
        )
        return None


def normalize_items(raws: Iterable[Any] | None) -> list[CatalogItem]:
    """
    Normalize a batch, preserving order and omitting rejected records.

    Never raises: one bad record never aborts the batch.
    """
    if raws is None or isinstance(raws, (str, bytes, Mapping)):
        return []

    items: list[CatalogItem] = []
    rejected = 0
    for raw in raws:
        item = try_normalize_item(raw)
        if item is None:
            rejected += 1
        else:
            items.append(item)

    if rejected:
        logger.debug(
            "Catalog batch normalized with omissions",
            extra={"accepted": len(items), "rejected": rejected},
        )
    return items


# ==============================================================================
# Coercion helpers
# ==============================================================================


def _text(value: Any, max_length: int) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_length].strip()


def _first_present(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _first_text(raw: Mapping[str, Any], keys: tuple[str, ...], max_length: int) -> str:
    for key in keys:
        text = _text(raw.get(key), max_length)
        if text:
            return text
    return ""


def _first_identifier(raw: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = raw.get(key)
        # bool is an int subclass but never a meaningful id
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        text = _text(value, MAX_NAME_LENGTH)
        if text:
            return text
    return ""


def _coerce_price(value: Any) -> Decimal:
    """Present-but-malformed prices become zero; so do negative ones."""
    if isinstance(value, bool) or value is None:
        return ZERO

    try:
        if isinstance(value, Decimal):
            price = value
        elif isinstance(value, int):
            price = Decimal(value)
        elif isinstance(value, float):
            if not math.isfinite(value):
                return ZERO
            price = Decimal(str(value))
        elif isinstance(value, str):
            price = Decimal(value.strip())
        else:
            return ZERO
    except (InvalidOperation, ValueError):
        return ZERO

    if not price.is_finite() or price < 0:
        return ZERO
    return price


def _coerce_quantity(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float) and math.isfinite(value):
        return max(0, int(value))
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return 0


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return False


def _coerce_status(value: Any) -> ItemStatus:
    if isinstance(value, str) and value.strip().lower() == ItemStatus.PREORDER.value:
        return ItemStatus.PREORDER
    return ItemStatus.READY


def _coerce_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _string_sequence(value: Any) -> tuple[str, ...]:
    """Absent or mistyped sequences become empty; blank members are dropped."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(
        member.strip()[:MAX_TAG_LENGTH]
        for member in value
        if isinstance(member, str) and member.strip()
    )
