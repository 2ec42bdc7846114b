"""CRUD and table routes, built once per entity kind.

Annotations here stay evaluated at definition time: the request body models
are taken from the entity kind when the router is built.
"""
from fastapi import APIRouter, Depends, status

from ..auth.enforcement_matrix import API_PREFIX
from ..auth.rbac_contract import Permission
from ..auth.session import AuthSession
from ..config import Settings
from ..dependencies import (
    get_app_settings,
    get_auth_session,
    get_stores,
    get_table_states,
    require_enforced_permission,
)
from ..errors import NotFoundError
from ..schemas.notification import MutationResponse, record_changed
from ..schemas.table import PageRequest, SearchRequest, SortRequest, TableView
from ..stores.base import EntityKind, RecordStore
from ..stores.entities import ENTITY_KINDS
from ..table.columns import TABLE_SPECS
from ..table.engine import TableEngine, TableViewState

ROW_ACTIONS = ("update", "delete")


def build_record_router(kind: EntityKind) -> APIRouter:
    base = f"{API_PREFIX}/{kind.path}"
    item = f"{base}/{{record_id}}"
    spec = TABLE_SPECS[kind.name]
    create_model = kind.create_model
    update_model = kind.update_model

    router = APIRouter(prefix=base, tags=[kind.name])

    def get_store(stores: dict[str, RecordStore] = Depends(get_stores)) -> RecordStore:
        return stores[kind.name]

    def get_state(states: dict[str, TableViewState] = Depends(get_table_states)) -> TableViewState:
        return states.setdefault(kind.name, TableViewState())

    def get_engine(
        store: RecordStore = Depends(get_store),
        state: TableViewState = Depends(get_state),
        session: AuthSession = Depends(get_auth_session),
        settings: Settings = Depends(get_app_settings),
    ) -> TableEngine:
        allowed = [
            action
            for action in ROW_ACTIONS
            if session.has_permission(Permission.for_action(kind.name, action))
        ]
        return TableEngine(
            store.rows(),
            spec.columns,
            search_key=spec.search_key,
            search_placeholder=spec.search_placeholder,
            page_size=settings.default_page_size,
            actions=lambda record: list(allowed),
            state=state,
        )

    @router.get(
        "",
        response_model=TableView,
        dependencies=[Depends(require_enforced_permission("GET", base))],
    )
    async def view_table(engine: TableEngine = Depends(get_engine)) -> TableView:
        return engine.render()

    @router.post(
        "/table/search",
        response_model=TableView,
        dependencies=[Depends(require_enforced_permission("POST", f"{base}/table/search"))],
    )
    async def search_table(
        payload: SearchRequest,
        engine: TableEngine = Depends(get_engine),
    ) -> TableView:
        engine.set_search_term(payload.term)
        return engine.render()

    @router.post(
        "/table/sort",
        response_model=TableView,
        dependencies=[Depends(require_enforced_permission("POST", f"{base}/table/sort"))],
    )
    async def sort_table(
        payload: SortRequest,
        engine: TableEngine = Depends(get_engine),
    ) -> TableView:
        engine.set_sort_column(payload.key)
        return engine.render()

    @router.post(
        "/table/page",
        response_model=TableView,
        dependencies=[Depends(require_enforced_permission("POST", f"{base}/table/page"))],
    )
    async def page_table(
        payload: PageRequest,
        engine: TableEngine = Depends(get_engine),
    ) -> TableView:
        engine.set_page(payload.page)
        return engine.render()

    @router.get(
        "/{record_id}",
        dependencies=[Depends(require_enforced_permission("GET", item))],
    )
    async def get_record(record_id: str, store: RecordStore = Depends(get_store)) -> dict:
        record = store.get_by_id(record_id)
        if record is None:
            raise NotFoundError(f"{kind.label} not found")
        return record.to_storage()

    @router.post(
        "",
        response_model=MutationResponse,
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_enforced_permission("POST", base))],
    )
    async def create_record(
        payload: create_model,
        store: RecordStore = Depends(get_store),
    ) -> MutationResponse:
        record = store.create(payload)
        return MutationResponse(
            record=record.to_storage(),
            notification=record_changed(kind.label, "created"),
        )

    @router.patch(
        "/{record_id}",
        response_model=MutationResponse,
        dependencies=[Depends(require_enforced_permission("PATCH", item))],
    )
    async def update_record(
        record_id: str,
        payload: update_model,
        store: RecordStore = Depends(get_store),
    ) -> MutationResponse:
        record = store.update(record_id, payload)
        return MutationResponse(
            record=record.to_storage() if record is not None else None,
            notification=record_changed(kind.label, "updated"),
        )

    @router.delete(
        "/{record_id}",
        response_model=MutationResponse,
        dependencies=[Depends(require_enforced_permission("DELETE", item))],
    )
    async def delete_record(
        record_id: str,
        store: RecordStore = Depends(get_store),
    ) -> MutationResponse:
        store.delete(record_id)
        return MutationResponse(notification=record_changed(kind.label, "deleted"))

    return router


routers = [build_record_router(kind) for kind in ENTITY_KINDS.values()]
