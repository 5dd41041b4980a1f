"""
FastAPI router for portfolio endpoints (mounted under /api/v1/portfolio).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from auth.dependencies import require_permission
from auth.permissions import (
    LEVEL_DELETE,
    LEVEL_EDIT,
    LEVEL_READ,
    RESOURCE_CERTIFICATIONS,
    RESOURCE_EXPERIENCE,
    RESOURCE_PROFILE,
    RESOURCE_PROJECTS,
    RESOURCE_SKILLS,
)
from core import cascade, db, mutation
from core.http import set_location_header
from core.schema import CERTIFICATIONS, PORTFOLIO_PROJECTS, SKILL_TYPES, SKILLS, WORK_EXPERIENCE
from core.store import Store

from . import repository, schemas, service

router = APIRouter()


# --- profile ---


@router.get("/profile", dependencies=[Depends(require_permission(RESOURCE_PROFILE, LEVEL_READ))])
async def get_profile(store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_profile(store)


@router.put("/profile", dependencies=[Depends(require_permission(RESOURCE_PROFILE, LEVEL_EDIT))])
async def put_profile(payload: schemas.ProfileUpdate, store: Store = Depends(db.get_store)) -> dict:
    """
    Create or update the single profile. Omitted fields keep their stored values.
    """
    await service.upsert_profile(store, payload.model_dump(exclude_unset=True))
    return await repository.get_profile(store)


@router.put("/profile/avatar", dependencies=[Depends(require_permission(RESOURCE_PROFILE, LEVEL_EDIT))])
async def put_avatar(payload: schemas.ProfileFileRequest, store: Store = Depends(db.get_store)) -> dict:
    await service.set_profile_file(store, "avatar", payload.file_id)
    return await repository.get_profile(store)


@router.delete(
    "/profile/avatar",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_PROFILE, LEVEL_DELETE))],
)
async def delete_avatar(store: Store = Depends(db.get_store)) -> Response:
    await service.set_profile_file(store, "avatar", None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/profile/resume", dependencies=[Depends(require_permission(RESOURCE_PROFILE, LEVEL_EDIT))])
async def put_resume(payload: schemas.ProfileFileRequest, store: Store = Depends(db.get_store)) -> dict:
    await service.set_profile_file(store, "resume", payload.file_id)
    return await repository.get_profile(store)


@router.delete(
    "/profile/resume",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_PROFILE, LEVEL_DELETE))],
)
async def delete_resume(store: Store = Depends(db.get_store)) -> Response:
    await service.set_profile_file(store, "resume", None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- work experience ---


@router.get("/experience", dependencies=[Depends(require_permission(RESOURCE_EXPERIENCE, LEVEL_READ))])
async def list_experience(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_work_experience(store)
    return {"experience": rows, "count": len(rows)}


@router.get(
    "/experience/{experience_id}",
    dependencies=[Depends(require_permission(RESOURCE_EXPERIENCE, LEVEL_READ))],
)
async def get_experience(experience_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_work_experience(store, experience_id)


@router.post(
    "/experience",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(RESOURCE_EXPERIENCE, LEVEL_EDIT))],
)
async def create_experience(
    payload: schemas.WorkExperienceCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    row = await mutation.create(store, WORK_EXPERIENCE, payload.model_dump())
    set_location_header(request, response, row["id"])
    return await repository.get_work_experience(store, int(row["id"]))


@router.put(
    "/experience/{experience_id}",
    dependencies=[Depends(require_permission(RESOURCE_EXPERIENCE, LEVEL_EDIT))],
)
async def update_experience(
    experience_id: int,
    payload: schemas.WorkExperienceUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    await mutation.update(store, WORK_EXPERIENCE, experience_id, payload.changes())
    return await repository.get_work_experience(store, experience_id)


@router.delete(
    "/experience/{experience_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_EXPERIENCE, LEVEL_DELETE))],
)
async def delete_experience(experience_id: int, store: Store = Depends(db.get_store)) -> Response:
    await cascade.delete(store, WORK_EXPERIENCE, experience_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- certifications ---


@router.get("/certifications", dependencies=[Depends(require_permission(RESOURCE_CERTIFICATIONS, LEVEL_READ))])
async def list_certifications(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_certifications(store)
    return {"certifications": rows, "count": len(rows)}


@router.get(
    "/certifications/{certification_id}",
    dependencies=[Depends(require_permission(RESOURCE_CERTIFICATIONS, LEVEL_READ))],
)
async def get_certification(certification_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_certification(store, certification_id)


@router.post(
    "/certifications",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(RESOURCE_CERTIFICATIONS, LEVEL_EDIT))],
)
async def create_certification(
    payload: schemas.CertificationCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    row = await mutation.create(store, CERTIFICATIONS, payload.model_dump())
    set_location_header(request, response, row["id"])
    return await repository.get_certification(store, int(row["id"]))


@router.put(
    "/certifications/{certification_id}",
    dependencies=[Depends(require_permission(RESOURCE_CERTIFICATIONS, LEVEL_EDIT))],
)
async def update_certification(
    certification_id: int,
    payload: schemas.CertificationUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    await mutation.update(store, CERTIFICATIONS, certification_id, payload.changes())
    return await repository.get_certification(store, certification_id)


@router.delete(
    "/certifications/{certification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_CERTIFICATIONS, LEVEL_DELETE))],
)
async def delete_certification(certification_id: int, store: Store = Depends(db.get_store)) -> Response:
    await cascade.delete(store, CERTIFICATIONS, certification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- skill types ---


@router.get("/skill-types", dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_READ))])
async def list_skill_types(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_skill_types(store)
    return {"skill_types": rows, "count": len(rows)}


@router.get("/skill-types/{skill_type_id}", dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_READ))])
async def get_skill_type(skill_type_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_skill_type(store, skill_type_id)


@router.post(
    "/skill-types",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_EDIT))],
)
async def create_skill_type(
    payload: schemas.SkillTypeCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    row = await mutation.create(store, SKILL_TYPES, payload.model_dump())
    set_location_header(request, response, row["id"])
    return await repository.get_skill_type(store, int(row["id"]))


@router.put("/skill-types/{skill_type_id}", dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_EDIT))])
async def update_skill_type(
    skill_type_id: int,
    payload: schemas.SkillTypeUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    await mutation.update(store, SKILL_TYPES, skill_type_id, payload.changes())
    return await repository.get_skill_type(store, skill_type_id)


@router.delete(
    "/skill-types/{skill_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_DELETE))],
)
async def delete_skill_type(skill_type_id: int, store: Store = Depends(db.get_store)) -> Response:
    # Fails while skills still reference the type (RESTRICT).
    await cascade.delete(store, SKILL_TYPES, skill_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- skills ---


@router.get("/skills", dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_READ))])
async def list_skills(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_skills(store)
    return {"skills": rows, "count": len(rows)}


@router.get("/skills/{skill_id}", dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_READ))])
async def get_skill(skill_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_skill(store, skill_id)


@router.post(
    "/skills",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_EDIT))],
)
async def create_skill(
    payload: schemas.SkillCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    row = await mutation.create(store, SKILLS, payload.model_dump())
    set_location_header(request, response, row["id"])
    return await repository.get_skill(store, int(row["id"]))


@router.put("/skills/{skill_id}", dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_EDIT))])
async def update_skill(
    skill_id: int,
    payload: schemas.SkillUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    await mutation.update(store, SKILLS, skill_id, payload.changes())
    return await repository.get_skill(store, skill_id)


@router.delete(
    "/skills/{skill_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_SKILLS, LEVEL_DELETE))],
)
async def delete_skill(skill_id: int, store: Store = Depends(db.get_store)) -> Response:
    await cascade.delete(store, SKILLS, skill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- projects ---


@router.get("/projects", dependencies=[Depends(require_permission(RESOURCE_PROJECTS, LEVEL_READ))])
async def list_projects(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_projects(store)
    return {"projects": rows, "count": len(rows)}


@router.get("/projects/{project_id}", dependencies=[Depends(require_permission(RESOURCE_PROJECTS, LEVEL_READ))])
async def get_project(project_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_project(store, project_id)


@router.post(
    "/projects",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(RESOURCE_PROJECTS, LEVEL_EDIT))],
)
async def create_project(
    payload: schemas.PortfolioProjectCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    values = payload.model_dump(exclude={"technology_ids"})
    project_id = await service.create_project(store, values, payload.technology_ids)
    set_location_header(request, response, project_id)
    return await repository.get_project(store, project_id)


@router.put("/projects/{project_id}", dependencies=[Depends(require_permission(RESOURCE_PROJECTS, LEVEL_EDIT))])
async def update_project(
    project_id: int,
    payload: schemas.PortfolioProjectUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    values = payload.changes()
    technology_ids = values.pop("technology_ids", None)
    await service.update_project(store, project_id, values, technology_ids)
    return await repository.get_project(store, project_id)


@router.put(
    "/projects/{project_id}/technologies",
    dependencies=[Depends(require_permission(RESOURCE_PROJECTS, LEVEL_EDIT))],
)
async def set_project_technologies(
    project_id: int,
    payload: schemas.LinkIdsRequest,
    store: Store = Depends(db.get_store),
) -> dict:
    """
    Replace the project's technology set with exactly `ids` (empty clears it).
    """
    await service.set_project_technologies(store, project_id, payload.ids)
    return await repository.get_project(store, project_id)


@router.delete(
    "/projects/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_PROJECTS, LEVEL_DELETE))],
)
async def delete_project(project_id: int, store: Store = Depends(db.get_store)) -> Response:
    await cascade.delete(store, PORTFOLIO_PROJECTS, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
