from fastapi import APIRouter, Depends

from app.api.deps import get_knowledge_store
from app.models.knowledge import KnowledgeFileRequest
from app.services.knowledge_store import KnowledgeStore

router = APIRouter(tags=["Knowledge"])


# =========================
# UPLOAD
# =========================
@router.post("/knowledge-file")
async def upload_knowledge_file(req: KnowledgeFileRequest,
                                store: KnowledgeStore = Depends(get_knowledge_store)):
    file_id = await store.add(req.filename, req.content)
    return {"success": True, "id": file_id}


# =========================
# LIST
# =========================
@router.get("/knowledge-files")
async def list_knowledge_files(store: KnowledgeStore = Depends(get_knowledge_store)):
    files = await store.list()
    return {"files": [f.model_dump(mode="json") for f in files]}


# =========================
# DELETE (IDEMPOTENT)
# =========================
@router.delete("/knowledge-file/{file_id}")
async def delete_knowledge_file(file_id: str, store: KnowledgeStore = Depends(get_knowledge_store)):
    await store.delete(file_id.strip("'\""))
    return {"success": True}
