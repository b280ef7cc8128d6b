"""CRM integration placeholder."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from web.dependencies import require_admin

router = APIRouter(prefix="/api/crm", tags=["crm"], dependencies=[Depends(require_admin)])


@router.get("")
async def crm_root() -> JSONResponse:
    return JSONResponse(status_code=501, content={"msg": "CRM module not implemented yet"})
