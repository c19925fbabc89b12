"""HTTP workbench over named in-memory lists.

``SequentialList`` is not thread-safe and FastAPI runs sync endpoints on a
thread pool, so every stored list is paired with a lock that is held for the
whole of each operation.
"""
import random
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from .config import get_settings
from .errors import OutOfRangeError
from .observability import CONTENT_TYPE_LATEST, generate_metrics, logger
from .sequential_list import SequentialList

# --- Modelos ---
class CreateListRequest(BaseModel):
    entries: List[Any] = Field(default_factory=list)

class EntryRequest(BaseModel):
    entry: Any
    position: Optional[int] = None

class ReplaceRequest(BaseModel):
    entry: Any

class ContainsRequest(BaseModel):
    entry: Any

class ListSnapshot(BaseModel):
    list_id: str
    entries: List[Any]
    length: int
    rendered: str

class EntryResult(BaseModel):
    position: int
    entry: Any

class ContainsResult(BaseModel):
    contains: bool


class _Slot:
    def __init__(self, entries: List[Any]) -> None:
        self.items: SequentialList[Any] = SequentialList(entries)
        self.lock = threading.Lock()


# --- Memoria en RAM ---
LISTS: Dict[str, _Slot] = {}
_LISTS_LOCK = threading.Lock()

settings = get_settings()
MAX_LISTS = settings.max_lists
RNG = random.Random(settings.shuffle_seed)

router = APIRouter()


@contextmanager
def _locked(list_id: str) -> Iterator[SequentialList[Any]]:
    slot = LISTS.get(list_id)
    if slot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="List not found")
    with slot.lock:
        try:
            yield slot.items
        except OutOfRangeError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _snapshot(list_id: str, items: SequentialList[Any]) -> ListSnapshot:
    return ListSnapshot(
        list_id=list_id,
        entries=items.to_array(),
        length=items.length(),
        rendered=str(items),
    )


# --- Endpoints ---
@router.get("/api/health-status/public")
def health_public():
    return {"status": "alive"}


@router.get("/metrics")
def metrics():
    return Response(content=generate_metrics(), media_type=CONTENT_TYPE_LATEST)


@router.post("/api/lists", response_model=ListSnapshot, status_code=status.HTTP_201_CREATED)
def create_list(body: CreateListRequest):
    with _LISTS_LOCK:
        if len(LISTS) >= MAX_LISTS:
            raise HTTPException(status.HTTP_429_TOO_MANY_REQUESTS, "List quota exceeded")
        list_id = f"l_{uuid4().hex[:12]}"
        slot = _Slot(body.entries)
        LISTS[list_id] = slot
    logger.info("List created", extra={"list_id": list_id, "length": len(body.entries)})
    # Snapshot the slot just built; a concurrent DELETE may already have
    # dropped it from LISTS.
    with slot.lock:
        return _snapshot(list_id, slot.items)


@router.get("/api/lists/{list_id}", response_model=ListSnapshot)
def read_list(list_id: str):
    with _locked(list_id) as items:
        return _snapshot(list_id, items)


@router.delete("/api/lists/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(list_id: str):
    with _LISTS_LOCK:
        if LISTS.pop(list_id, None) is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "List not found")
    logger.info("List deleted", extra={"list_id": list_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/api/lists/{list_id}/clear", response_model=ListSnapshot)
def clear_list(list_id: str):
    with _locked(list_id) as items:
        items.clear()
        return _snapshot(list_id, items)


@router.post("/api/lists/{list_id}/entries", response_model=ListSnapshot)
def add_entry(list_id: str, body: EntryRequest):
    with _locked(list_id) as items:
        if body.position is None:
            items.add(body.entry)
        else:
            items.insert(body.position, body.entry)
        return _snapshot(list_id, items)


@router.get("/api/lists/{list_id}/entries/{position}", response_model=EntryResult)
def get_entry(list_id: str, position: int):
    with _locked(list_id) as items:
        return EntryResult(position=position, entry=items.get_entry(position))


@router.put("/api/lists/{list_id}/entries/{position}", response_model=EntryResult)
def replace_entry(list_id: str, position: int, body: ReplaceRequest):
    """Replace the entry at ``position``; the response carries the old value."""
    with _locked(list_id) as items:
        return EntryResult(position=position, entry=items.replace(position, body.entry))


@router.delete("/api/lists/{list_id}/entries/{position}", response_model=EntryResult)
def remove_entry(list_id: str, position: int):
    with _locked(list_id) as items:
        return EntryResult(position=position, entry=items.remove(position))


@router.post("/api/lists/{list_id}/contains", response_model=ContainsResult)
def contains_entry(list_id: str, body: ContainsRequest):
    with _locked(list_id) as items:
        return ContainsResult(contains=items.contains(body.entry))


@router.post("/api/lists/{list_id}/reverse", response_model=ListSnapshot)
def reverse_list(list_id: str):
    with _locked(list_id) as items:
        items.reverse()
        return _snapshot(list_id, items)


@router.post("/api/lists/{list_id}/random-permutation", response_model=ListSnapshot)
def permute_list(list_id: str):
    with _locked(list_id) as items:
        items.random_permutation(RNG)
        return _snapshot(list_id, items)


@router.post("/api/lists/{list_id}/shuffle", response_model=ListSnapshot)
def shuffle_list(list_id: str):
    with _locked(list_id) as items:
        items.shuffle(RNG)
        return _snapshot(list_id, items)


@router.post("/api/lists/{list_id}/interleave", response_model=ListSnapshot)
def interleave_list(list_id: str):
    with _locked(list_id) as items:
        items.interleave()
        return _snapshot(list_id, items)


@router.post("/api/lists/{list_id}/move-to-back/{position}", response_model=ListSnapshot)
def move_to_back(list_id: str, position: int):
    with _locked(list_id) as items:
        items.move_to_back(position)
        return _snapshot(list_id, items)
