"""
Blog Backend: Data Store Wiring
=================================

What:  Builds the process-wide Data Store client and hands it to handlers.
How:   create_data_store() runs once in the application lifespan; the
       result lives on `app.state.data_store`. Route handlers receive it via
       `Depends(get_data_store)`, so tests can inject any DataStore through
       `create_app(data_store=...)`.
"""

from fastapi import Request

from blog_api.config import SQL_BACKEND, Settings, settings
from blog_api.exceptions import DataStoreError
from blog_api.services.rest_store import RestDataStore
from blog_api.services.sql_store import SqlDataStore
from blog_api.services.store_base import DataStore


def create_data_store(config: Settings = settings) -> DataStore:
    """Construct the client selected by DATA_STORE_BACKEND."""
    if config.data_store_backend == SQL_BACKEND:
        return SqlDataStore.from_url(config.database_url)
    return RestDataStore(
        url=config.supabase_url,
        key=config.supabase_anon_key,
        timeout=config.data_store_timeout,
    )


def get_data_store(request: Request) -> DataStore:
    """FastAPI dependency returning the application's Data Store client."""
    store = getattr(request.app.state, "data_store", None)
    if store is None:
        raise DataStoreError(message="Data Store client is not initialized")
    return store
