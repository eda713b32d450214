"""
Vault-backed synchronization endpoints.

These stand in for the host application's affordances: the toggle
button, the extract command, and the storage "modified" notification.
"""

from fastapi import APIRouter, Depends

from pdfnotes.app.api.dependencies import SessionStore, get_session_store, get_sync
from pdfnotes.app.schemas.vault import ExtractResponse, ModifiedResponse, VaultPathRequest
from pdfnotes.app.sync import MarkdownSync, ToggleResult

router = APIRouter()


@router.post(
    "/toggle",
    summary="Open or close the companion note for a PDF",
    response_model=ToggleResult,
)
async def toggle_companion(
    request: VaultPathRequest,
    sync: MarkdownSync = Depends(get_sync),
    store: SessionStore = Depends(get_session_store),
) -> ToggleResult:
    result = await sync.toggle(store.current, request.path)
    store.current = result.session
    return result


@router.post(
    "/extract",
    summary="Extract the embedded note to a new Markdown file",
    response_model=ExtractResponse,
)
async def extract_to_file(
    request: VaultPathRequest,
    sync: MarkdownSync = Depends(get_sync),
) -> ExtractResponse:
    created = await sync.extract_to_file(request.path)
    return ExtractResponse(path=created)


@router.post(
    "/events/modified",
    summary="Notify that a vault file was modified",
    response_model=ModifiedResponse,
)
async def file_modified(
    request: VaultPathRequest,
    sync: MarkdownSync = Depends(get_sync),
    store: SessionStore = Depends(get_session_store),
) -> ModifiedResponse:
    updated = await sync.handle_file_modified(store.current, request.path)
    return ModifiedResponse(updated=updated)
