from fastapi import APIRouter, Depends, HTTPException, status

from classgrid.api.deps import get_faculty_repository
from classgrid.models.faculty import Faculty
from classgrid.schemas.faculty import FacultyCreate, FacultyOut, FacultyUpdate, initials
from classgrid.services.repository import FacultyRepository

router = APIRouter()


@router.get("/", response_model=list[FacultyOut])
def list_faculty(repo: FacultyRepository = Depends(get_faculty_repository)) -> list[FacultyOut]:
    return repo.list()


@router.get("/{faculty_id}", response_model=FacultyOut)
def get_faculty(faculty_id: str, repo: FacultyRepository = Depends(get_faculty_repository)) -> FacultyOut:
    faculty = repo.get(faculty_id)
    if faculty is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty member not found")
    return faculty


@router.post("/", response_model=FacultyOut, status_code=status.HTTP_201_CREATED)
def create_faculty(
    payload: FacultyCreate,
    repo: FacultyRepository = Depends(get_faculty_repository),
) -> FacultyOut:
    if repo.get_by_name(payload.name) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f'"{payload.name}" already exists')
    return repo.save(Faculty(**payload.model_dump()))


@router.put("/{faculty_id}", response_model=FacultyOut)
def update_faculty(
    faculty_id: str,
    payload: FacultyUpdate,
    repo: FacultyRepository = Depends(get_faculty_repository),
) -> FacultyOut:
    faculty = repo.get(faculty_id)
    if faculty is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty member not found")

    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None or key == "email"}
    if "name" in data:
        if repo.get_by_name(data["name"], exclude_id=faculty_id) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f'"{data["name"]}" already exists')
        if "short_name" not in data and faculty.short_name == initials(faculty.name):
            data["short_name"] = initials(data["name"])

    for key, value in data.items():
        setattr(faculty, key, value)
    return repo.save(faculty)


@router.delete("/{faculty_id}")
def delete_faculty(faculty_id: str, repo: FacultyRepository = Depends(get_faculty_repository)) -> dict:
    faculty = repo.get(faculty_id)
    if faculty is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty member not found")
    repo.delete(faculty)
    return {"success": True}
