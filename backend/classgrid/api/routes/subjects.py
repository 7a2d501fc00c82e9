from fastapi import APIRouter, Depends, HTTPException, Query, status

from classgrid.api.deps import get_subject_repository
from classgrid.models.subject import Subject
from classgrid.schemas.subject import SubjectCreate, SubjectOut, SubjectUpdate
from classgrid.schemas.timetable import BranchType, YearType
from classgrid.services.repository import SubjectRepository

router = APIRouter()


@router.get("/", response_model=list[SubjectOut])
def list_subjects(
    year: YearType | None = Query(default=None),
    branch: BranchType | None = Query(default=None),
    repo: SubjectRepository = Depends(get_subject_repository),
) -> list[SubjectOut]:
    return repo.filter(year=year, branch=branch)


@router.get("/{subject_id}", response_model=SubjectOut)
def get_subject(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)) -> SubjectOut:
    subject = repo.get(subject_id)
    if subject is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return subject


@router.post("/", response_model=SubjectOut, status_code=status.HTTP_201_CREATED)
def create_subject(
    payload: SubjectCreate,
    repo: SubjectRepository = Depends(get_subject_repository),
) -> SubjectOut:
    if repo.find_duplicate(payload.name, payload.year, payload.branch) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This subject already exists")
    return repo.save(Subject(**payload.model_dump()))


@router.put("/{subject_id}", response_model=SubjectOut)
def update_subject(
    subject_id: str,
    payload: SubjectUpdate,
    repo: SubjectRepository = Depends(get_subject_repository),
) -> SubjectOut:
    subject = repo.get(subject_id)
    if subject is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")

    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    name = " ".join(data.get("name", subject.name).split())
    year = data.get("year", subject.year)
    branch = data.get("branch", subject.branch)
    if repo.find_duplicate(name, year, branch, exclude_id=subject_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This subject already exists")
    if "name" in data:
        data["name"] = name

    for key, value in data.items():
        setattr(subject, key, value)
    return repo.save(subject)


@router.delete("/{subject_id}")
def delete_subject(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)) -> dict:
    subject = repo.get(subject_id)
    if subject is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    repo.delete(subject)
    return {"success": True}
