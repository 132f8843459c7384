from fastapi import Request

from projecthub.integrations.storage import StorageGateway


def get_storage_gateway(request: Request) -> StorageGateway:
    """The gateway built at startup (see projecthub.main.lifespan)."""
    return request.app.state.storage_gateway
