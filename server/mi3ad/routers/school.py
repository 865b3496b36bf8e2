"""School router for the school directory."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.chat import GetSchoolRequest, School, SchoolList, SearchSchoolsRequest
from ..services.chat_service import ChatService

router = APIRouter(prefix="/v1/school", tags=["school"])

DB_DEPENDENCY = Depends(get_db)


@router.post("/list", response_model=SchoolList)
async def list_schools(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    schools = await ChatService(db).list_schools()
    response_data = SchoolList(items=[School.model_validate(s) for s in schools])
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/get", response_model=School)
async def get_school(
    request: GetSchoolRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    school = await ChatService(db).get_school(request.school_id)
    return JSONResponse(
        status_code=200,
        content=School.model_validate(school).model_dump(mode="json")
    )


@router.post("/search", response_model=SchoolList)
async def search_schools(
    request: SearchSchoolsRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Search school names and locations in English and Arabic."""
    schools = await ChatService(db).search_schools(request.query)
    response_data = SchoolList(items=[School.model_validate(s) for s in schools])
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
