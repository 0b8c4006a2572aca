# /app/routers/students_router.py

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ..core.deps import get_current_demonstrator
from ..core.exceptions import CSVParseError, UnsupportedFileError
from ..core.http_errors import raise_for_errors
from ..models import page_model
from ..models.user_model import StudentCreate, User
from ..services.database_service import DatabaseService, get_db_service
from ..services.roster_helpers.csv_intake import CSVImport
from ..services.student_service import StudentRosterPage

router = APIRouter()


async def _load_csv(csv_import: CSVImport, file: UploadFile) -> None:
    try:
        csv_import.load(await file.read(), file.content_type, file.filename)
    except UnsupportedFileError as e:
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e))
    except CSVParseError:
        raise_for_errors(csv_import.notifier, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


@router.get("", response_model=page_model.StudentRosterView, summary="List Students")
def list_students(
    search: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_demonstrator),
):
    page = StudentRosterPage(db)
    page.list_students()
    raise_for_errors(page.notifier)

    page.search_term = search or ""
    filtered = page.filtered_students
    return page_model.StudentRosterView(
        students=filtered, total=len(filtered), search=page.search_term, notifications=page.notifier.notifications
    )


@router.post(
    "",
    response_model=page_model.StudentAdded,
    status_code=status.HTTP_201_CREATED,
    summary="Add a Student",
)
def add_student(
    student_create: StudentCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_demonstrator),
):
    page = StudentRosterPage(db)
    new_student = page.add_student(email=student_create.email, name=student_create.name)
    raise_for_errors(page.notifier)
    return page_model.StudentAdded(student=new_student, notifications=page.notifier.notifications)


@router.post("/import/preview", response_model=page_model.CSVPreview, summary="Preview a Student CSV")
async def preview_student_csv(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_demonstrator),
):
    """Parses the upload and returns the first rows without importing anything."""
    csv_import = CSVImport(on_import=lambda rows: None)
    await _load_csv(csv_import, file)
    return page_model.CSVPreview(
        filename=file.filename,
        headers=csv_import.headers,
        preview=csv_import.preview,
        total_rows=csv_import.total_rows,
        preview_note=csv_import.preview_note,
        notifications=csv_import.notifier.notifications,
    )


@router.post(
    "/import",
    response_model=page_model.StudentImportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import Students from CSV",
)
async def import_student_csv(
    file: UploadFile = File(...),
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_demonstrator),
):
    page = StudentRosterPage(db)
    csv_import = CSVImport(on_import=page.import_students, notifier=page.notifier)
    await _load_csv(csv_import, file)

    if not csv_import.commit():
        raise_for_errors(page.notifier, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
    raise_for_errors(page.notifier)

    return page_model.StudentImportResult(
        filename=file.filename,
        headers=csv_import.headers,
        preview=csv_import.preview,
        total_rows=csv_import.total_rows,
        preview_note=csv_import.preview_note,
        imported=page.students,
        notifications=page.notifier.notifications,
    )
