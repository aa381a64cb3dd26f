import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError
from starlette.requests import ClientDisconnect

from itemsvc.config import JSON_CONTENT_TYPE
from itemsvc.errors import MalformedBodyError, UnsupportedMediaTypeError
from itemsvc.schemas import Item, ItemCreate
from itemsvc.storage import ItemStore

log = logging.getLogger("itemsvc.routes.items")

router = APIRouter(prefix="/items", tags=["items"])


def get_store(request: Request) -> ItemStore:
    return request.app.state.store


def get_key_factory(request: Request) -> Callable[[], str]:
    return request.app.state.key_factory


def parse_item(raw_body: bytes) -> ItemCreate:
    try:
        return ItemCreate.model_validate_json(raw_body)
    except ValidationError as err:
        raise MalformedBodyError(str(err)) from err


@router.get("", response_model=list[Item])
async def list_items(store: ItemStore = Depends(get_store)):
    return store.list()


@router.post("", response_model=Item, status_code=201)
async def create_item(
    request: Request,
    store: ItemStore = Depends(get_store),
    next_key: Callable[[], str] = Depends(get_key_factory),
):
    try:
        raw_body = await request.body()
    except ClientDisconnect as err:
        raise MalformedBodyError("client disconnected while sending the body") from err

    content_type = request.headers.get("content-type", "")
    if content_type != JSON_CONTENT_TYPE:
        log.warning("item.rejected", extra={"reason": "content_type", "content_type": content_type})
        raise UnsupportedMediaTypeError(content_type)

    try:
        payload = parse_item(raw_body)
    except MalformedBodyError:
        log.warning("item.rejected", extra={"reason": "malformed_body"})
        raise

    item = Item(key=next_key(), value=payload.value)
    if await request.is_disconnected():
        # Nobody is left to read the answer; skip the write.
        log.info("item.abandoned", extra={"key": item.key})
        return Response(status_code=499)

    store.put(item)
    log.info("item.created", extra={"key": item.key})
    return item


@router.get("/{key}", response_model=Item)
async def get_item(key: str, store: ItemStore = Depends(get_store)):
    return store.get(key)
