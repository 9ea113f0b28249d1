"""
Serialization helpers for subscription records.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter

from .models import Subscription

logger = logging.getLogger(__name__)

_subscription_list = TypeAdapter(Optional[List[Subscription]])


def load_subscriptions(raw: Union[str, bytes]) -> List[Subscription]:
    """
    Parse a bare JSON array of subscription records.

    A JSON ``null`` document is read as an empty list. Raises
    ``pydantic.ValidationError`` when the document does not match.
    """
    return _subscription_list.validate_json(raw) or []


def dump_subscriptions(subscriptions: List[Subscription]) -> str:
    """
    Serialize subscriptions as a JSON array indented by two spaces,
    using the API's field names.
    """
    payload = [s.model_dump(mode="json", by_alias=True) for s in subscriptions]
    return json.dumps(payload, indent=2)


def write_subscriptions(subscriptions: List[Subscription], path: Path) -> Path:
    """
    Write subscriptions to ``path``, creating it with mode 0644.
    """
    path = Path(path)
    data = dump_subscriptions(subscriptions)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(data)
    logger.info(f"Wrote {len(subscriptions)} subscriptions to {path}")
    return path
