# caesarfile/routers/cipher.py
from typing import Optional
from fastapi import APIRouter, UploadFile, File, Form, HTTPException, Request
from fastapi.responses import StreamingResponse
from fastapi.concurrency import run_in_threadpool
from caesarfile.algo.caesar import Direction, normalize_key
from caesarfile.algo.errors import CipherError, InvalidStreamError
from caesarfile.algo.stream import process_stream
from caesarfile.utils import settings
import io, logging, mimetypes
import time, uuid

logger = logging.getLogger(__name__)

router = APIRouter()

RESULT_STORE: dict[str, dict] = {}

def _put_result(data: bytes, mime: str = "application/octet-stream", filename: str = "output.bin") -> str:
    token = uuid.uuid4().hex
    RESULT_STORE[token] = {"data": data, "mime": mime, "ts": time.time(), "filename": filename}
    _purge_expired()
    return token

def _purge_expired(now: Optional[float] = None) -> None:
    now = time.time() if now is None else now
    dead = [k for k, v in RESULT_STORE.items() if now - v["ts"] > settings.STORE_TTL_SEC]
    for k in dead:
        RESULT_STORE.pop(k, None)

def output_name(name: str, direction: Direction) -> str:
    if direction is Direction.ENCRYPT:
        return f"{name}.enc"
    if name.endswith(".enc") and len(name) > len(".enc"):
        return name[: -len(".enc")]
    return f"{name}.dec"

@router.get("/download/{token}")
def download(token: str):
    _purge_expired()
    item = RESULT_STORE.get(token)
    if not item:
        raise HTTPException(404, "Not found")
    headers = {
        "Content-Disposition": f'attachment; filename="{item["filename"]}"',
        "Content-Length": str(len(item["data"])),
    }
    return StreamingResponse(io.BytesIO(item["data"]), media_type=item["mime"], headers=headers)

async def _run(request: Request, upload: UploadFile, key: int, direction: Direction) -> dict:
    data = await upload.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(413, f"File exceeds upload limit ({settings.MAX_UPLOAD_BYTES} bytes)")

    out = io.BytesIO()
    try:
        processed = await run_in_threadpool(process_stream, io.BytesIO(data), out, key, direction)
    except InvalidStreamError as e:
        raise HTTPException(400, f"{direction.value} failed: {e}") from e
    except CipherError as e:
        logger.error("%s of %r failed: %s", direction.value, upload.filename, e)
        raise HTTPException(500, f"{direction.value} failed: {e}") from e

    src_name = upload.filename or "input.bin"
    dst_name = output_name(src_name, direction)
    if direction is Direction.DECRYPT:
        mime = mimetypes.guess_type(dst_name)[0] or "application/octet-stream"
    else:
        mime = "application/octet-stream"
    token = _put_result(out.getvalue(), mime=mime, filename=dst_name)
    base = str(request.base_url).rstrip("/")

    return {
        "success": True,
        "downloadUrl": f"{base}/api/download/{token}",
        "originalFileName": src_name,
        "fileName": dst_name,
        "fileSizeBytes": processed,
        "normalizedKey": normalize_key(key),
        "message": "OK",
    }

@router.post("/encrypt")
async def encrypt(
    request: Request,
    file: UploadFile = File(...),
    key: int = Form(...),
):
    """Shift every byte of the upload by key (mod 256)."""
    return await _run(request, file, key, Direction.ENCRYPT)

@router.post("/decrypt")
async def decrypt(
    request: Request,
    file: UploadFile = File(...),
    key: int = Form(...),
):
    """Reverse /encrypt with the same key."""
    return await _run(request, file, key, Direction.DECRYPT)
