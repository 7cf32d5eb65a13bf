from fastapi import Request

from partsflow.storage.base import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
