"""
Content Page Editor - Page Routes

Serves the sidebar/editor layout using Jinja2 templates and handles the
form posts that create, rename, rewrite and delete pages.

Query parameters drive the UI state that a browser would otherwise hold:

- ``?edit=title`` / ``?edit=body`` — open that field's editor
- ``?sidebar=edit``                — show delete buttons and "New page"

Each request loads and saves the page named in its own URL; the shared
store only supplies the sidebar list.  Remote failures leave the cached
state unchanged and render an alert.
"""

from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from loguru import logger

from src.config import (
    APP_VERSION,
    BODY_MAX_LENGTH,
    NEW_PAGE_TITLE,
    SERVICE_NAME,
    TITLE_MAX_LENGTH,
)
from src.content_client import ApiError, ContentServiceError
from src.models import Content, CreateContentDTO, UpdateContentDTO
from src.services.content_store import ContentStore
from src.services.validation import validate_body, validate_title

router = APIRouter(tags=["Pages"])

# User-facing alert messages
CREATE_FAILED = "ページの作成に失敗しました。もう一度お試しください。"
DELETE_FAILED = "ページの削除に失敗しました。もう一度お試しください。"
TITLE_SAVE_FAILED = "タイトルの保存に失敗しました。もう一度お試しください。"
BODY_SAVE_FAILED = "本文の保存に失敗しました。もう一度お試しください。"
LOAD_FAILED = "ページの読み込みに失敗しました。"
LIST_LOAD_FAILED = "ページ一覧の取得に失敗しました。"
NOT_FOUND = "ページが見つかりません。"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _store(request: Request) -> ContentStore:
    return request.app.state.store


def _page_url(content_id: Optional[int], sidebar_edit: bool = False) -> str:
    url = f"/pages/{content_id}" if content_id is not None else "/"
    return f"{url}?sidebar=edit" if sidebar_edit else url


def _is_not_found(error: Exception) -> bool:
    return isinstance(error, ApiError) and error.status == 404


async def _load_page(
    request: Request, content_id: int
) -> Tuple[Optional[Content], Optional[ContentServiceError]]:
    """Load one page for this request only; returns ``(content, error)``."""
    try:
        return await _store(request).load(content_id), None
    except ContentServiceError as e:
        logger.warning("⚠️  Failed to load page {}: {}", content_id, e)
        return None, e


def _render(
    request: Request,
    *,
    content: Optional[Content] = None,
    selected_id: Optional[int] = None,
    not_found: bool = False,
    edit: Optional[str] = None,
    sidebar_edit: bool = False,
    draft: Optional[Dict[str, str]] = None,
    errors: Optional[Dict[str, str]] = None,
    alert: Optional[str] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render the layout for *content*, the page this request opened."""
    store = _store(request)
    if selected_id is None and content is not None:
        selected_id = content.id

    # Editor values: a rejected draft wins over the stored page
    title = (content.title or "") if content else ""
    body = (content.body or "") if content else ""
    if draft:
        title = draft.get("title", title)
        body = draft.get("body", body)

    if alert is None and store.error is not None:
        alert = LIST_LOAD_FAILED

    context: Dict[str, Any] = {
        "page_title": content.display_title if content else SERVICE_NAME,
        "service_name": SERVICE_NAME,
        "version": APP_VERSION,
        "contents": store.contents,
        "selected_id": selected_id,
        "content": content,
        "not_found": not_found,
        "title": title,
        "body": body,
        "edit": edit,
        "sidebar_edit": sidebar_edit,
        "errors": errors or {},
        "alert": alert,
        "title_max": TITLE_MAX_LENGTH,
        "body_max": BODY_MAX_LENGTH,
        "new_page_title": NEW_PAGE_TITLE,
    }
    return request.app.state.templates.TemplateResponse(
        request, "index.html", context, status_code=status_code
    )


def _render_load_failure(
    request: Request,
    content_id: int,
    error: ContentServiceError,
    sidebar_edit: bool = False,
) -> HTMLResponse:
    if _is_not_found(error):
        return _render(
            request,
            selected_id=content_id,
            not_found=True,
            alert=NOT_FOUND,
            sidebar_edit=sidebar_edit,
            status_code=404,
        )
    return _render(
        request,
        selected_id=content_id,
        alert=LOAD_FAILED,
        sidebar_edit=sidebar_edit,
        status_code=502,
    )


async def _save_field(
    request: Request, content_id: int, field: str, value: str
) -> HTMLResponse | RedirectResponse:
    """Validate and save a single field of page *content_id*."""
    store = _store(request)
    await store.ensure_loaded()

    content, error = await _load_page(request, content_id)
    if content is None:
        return _render_load_failure(request, content_id, error)

    validator = validate_title if field == "title" else validate_body
    invalid = validator(value)
    if invalid:
        logger.debug("✏️  Rejected {} for page {}: {}", field, content_id, invalid.message)
        return _render(
            request,
            content=content,
            edit=field,
            draft={field: value},
            errors={field: invalid.message},
            status_code=422,
        )

    try:
        await store.update(content_id, UpdateContentDTO(**{field: value}))
    except ContentServiceError as e:
        logger.error("❌ Failed to save {} for page {}: {}", field, content_id, e)
        return _render(
            request,
            content=content,
            edit=field,
            draft={field: value},
            alert=TITLE_SAVE_FAILED if field == "title" else BODY_SAVE_FAILED,
            status_code=502,
        )

    return RedirectResponse(_page_url(content_id), status_code=303)


async def _render_with_current(
    request: Request, current: Optional[int], alert: str
) -> HTMLResponse:
    """Re-render the sidebar in edit mode with *current* still open."""
    content = None
    if current is not None:
        content, _ = await _load_page(request, current)
    return _render(
        request,
        content=content,
        selected_id=current,
        sidebar_edit=True,
        alert=alert,
        status_code=502,
    )


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------
@router.get("/", response_class=HTMLResponse)
async def home(request: Request, sidebar: Optional[str] = Query(None)):
    """Sidebar with no page open."""
    await _store(request).ensure_loaded()
    return _render(request, sidebar_edit=sidebar == "edit")


@router.get("/pages/{content_id}", response_class=HTMLResponse)
async def page_view(
    request: Request,
    content_id: int,
    edit: Optional[str] = Query(None, pattern="^(title|body)$"),
    sidebar: Optional[str] = Query(None),
):
    """Open a page in the editor."""
    await _store(request).ensure_loaded()
    sidebar_edit = sidebar == "edit"

    content, error = await _load_page(request, content_id)
    if content is None:
        return _render_load_failure(request, content_id, error, sidebar_edit)

    return _render(request, content=content, edit=edit, sidebar_edit=sidebar_edit)


@router.get("/refresh")
async def refresh(request: Request, next_url: str = Query("/", alias="next")):
    """Refetch the sidebar list, then go back to *next*."""
    await _store(request).refresh()
    # Only follow local paths
    local = next_url.startswith("/") and not next_url.startswith("//")
    target = next_url if local else "/"
    return RedirectResponse(target, status_code=303)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------
@router.post("/pages")
async def create_page(request: Request, current: Optional[int] = Form(None)):
    """
    Create a blank page and open it.

    On failure the page that was open (*current*) stays open.
    """
    store = _store(request)
    await store.ensure_loaded()

    try:
        new_content = await store.create(
            CreateContentDTO(title=NEW_PAGE_TITLE, body="")
        )
    except ContentServiceError as e:
        logger.error("❌ Failed to create page: {}", e)
        return await _render_with_current(request, current, CREATE_FAILED)

    return RedirectResponse(_page_url(new_content.id), status_code=303)


@router.post("/pages/{content_id}/title")
async def save_title(request: Request, content_id: int, title: str = Form("")):
    return await _save_field(request, content_id, "title", title)


@router.post("/pages/{content_id}/body")
async def save_body(request: Request, content_id: int, body: str = Form("")):
    return await _save_field(request, content_id, "body", body)


@router.post("/pages/{content_id}/delete")
async def delete_page(
    request: Request,
    content_id: int,
    current: Optional[int] = Form(None),
):
    """
    Delete a page from the sidebar.

    *current* is the page open in the editor when the button was pressed;
    it stays open unless it is the one being deleted.
    """
    store = _store(request)
    await store.ensure_loaded()

    try:
        await store.delete(content_id)
    except ContentServiceError as e:
        logger.error("❌ Failed to delete page {}: {}", content_id, e)
        return await _render_with_current(request, current, DELETE_FAILED)

    if current == content_id:
        current = None
    return RedirectResponse(_page_url(current, sidebar_edit=True), status_code=303)
