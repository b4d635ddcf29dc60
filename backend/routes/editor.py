"""Editor routes — current state, intents, save/reload, export and preview."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from backend.models.editor import (
    EditorStateResponse,
    IntentBatchRequest,
    IntentRequest,
    IntentResponse,
    SaveResponse,
)
from backend.services.editor_session import EditorSession, get_editor_session
from engine.kernel.intents import intents_from_dicts, make_intent

router = APIRouter(prefix="/api", tags=["editor"])


@router.get("/document", status_code=200)
async def get_document(session: EditorSession = Depends(get_editor_session)) -> EditorStateResponse:
    """Current document, selection, and drag source."""
    return EditorStateResponse.from_state(session.state)


@router.post("/intents", status_code=200)
async def apply_intent(
    req: IntentRequest,
    session: EditorSession = Depends(get_editor_session),
) -> IntentResponse:
    """
    Apply one gesture from the canvas.

    Rejected intents (unknown block, invalid move, bad payload) are not errors:
    the response carries applied=false, the reason, and the unchanged state.
    """
    result = session.dispatch(make_intent(req.type, req.payload))
    return IntentResponse.from_result(result)


@router.post("/intents/batch", status_code=200)
async def apply_intents(
    req: IntentBatchRequest,
    session: EditorSession = Depends(get_editor_session),
) -> list[IntentResponse]:
    """Apply gestures in order; each one sees the state left by the previous."""
    results = session.dispatch_all(intents_from_dicts([i.model_dump() for i in req.intents]))
    return [IntentResponse.from_result(r) for r in results]


@router.post("/document/save", status_code=200)
async def save_document(session: EditorSession = Depends(get_editor_session)) -> SaveResponse:
    """Persist the current document under the configured storage key."""
    await session.save()
    return SaveResponse(storage_key=session.storage_key, blocks=len(session.state.document))


@router.post("/document/reload", status_code=200)
async def reload_document(session: EditorSession = Depends(get_editor_session)) -> EditorStateResponse:
    """Reload from storage. A missing or corrupt save yields the default document."""
    state = await session.load()
    return EditorStateResponse.from_state(state)


@router.get("/export", status_code=200)
async def export_document(session: EditorSession = Depends(get_editor_session)) -> HTMLResponse:
    """Download the document as a standalone HTML file."""
    filename = f"lumina-template-{int(time.time() * 1000)}.html"
    return HTMLResponse(
        content=session.export(),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/preview", status_code=200)
async def preview_document(session: EditorSession = Depends(get_editor_session)) -> HTMLResponse:
    """The exported markup, served inline for the live preview."""
    return HTMLResponse(content=session.export())
