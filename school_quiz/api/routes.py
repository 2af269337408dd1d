# school_quiz/api/routes.py
import json
import logging
import queue
import threading

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from ..core.config import config
from ..core.utils import DateTimeUtils
from ..models.schemas import (
    GenerateRequest, QuestionCreateRequest, SelectOptionRequest,
    SettingsUpdateRequest, StartTestRequest
)
from ..services.admin_service import AdminService, get_admin_service
from ..services.test_service import TestService, format_session_view, get_test_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/")
async def home():
    """Home endpoint"""
    return {
        "service": config.API_TITLE,
        "version": config.API_VERSION,
        "status": "operational"
    }

@router.get("/api/info")
async def api_info():
    """Landing page: the two roles and where they start"""
    return {
        "name": config.API_TITLE,
        "description": config.API_DESCRIPTION,
        "roles": {
            "student": {
                "label": "I am a Student",
                "availability": "GET /api/test/availability",
                "start": "POST /api/test/start"
            },
            "teacher": {
                "label": "I am a Teacher",
                "settings": "GET /api/admin/settings",
                "results": "GET /api/admin/results"
            }
        },
        "subjects": config.SUBJECTS,
        "grades": {"min": config.MIN_GRADE, "max": config.MAX_GRADE},
        "timestamp": DateTimeUtils.get_current_timestamp()
    }

# ==================== Student flow ====================
# Async handlers run on the event loop that drives the countdown timers.

@router.get("/api/test/availability")
async def test_availability(test_service: TestService = Depends(get_test_service)):
    return test_service.get_availability()

@router.post("/api/test/start")
async def start_test(request: StartTestRequest, test_service: TestService = Depends(get_test_service)):
    session = test_service.start_test(request.student_name)
    return format_session_view(session)

@router.get("/api/test/{session_id}")
async def get_test_state(session_id: str, test_service: TestService = Depends(get_test_service)):
    return format_session_view(test_service.get_test_state(session_id))

@router.post("/api/test/{session_id}/answer")
async def select_option(session_id: str, request: SelectOptionRequest,
                        test_service: TestService = Depends(get_test_service)):
    session = test_service.select_option(session_id, request.option_index)
    return format_session_view(session)

@router.post("/api/test/{session_id}/next")
async def next_question(session_id: str, test_service: TestService = Depends(get_test_service)):
    return format_session_view(test_service.go_next(session_id))

@router.post("/api/test/{session_id}/previous")
async def previous_question(session_id: str, test_service: TestService = Depends(get_test_service)):
    return format_session_view(test_service.go_previous(session_id))

@router.post("/api/test/{session_id}/submit")
async def submit_test(session_id: str, test_service: TestService = Depends(get_test_service)):
    session = test_service.submit_test(session_id)
    return format_session_view(session)

@router.delete("/api/test/{session_id}")
async def exit_test(session_id: str, test_service: TestService = Depends(get_test_service)):
    test_service.exit_test(session_id)
    return {"session_id": session_id, "closed": True}

# ==================== Teacher flow ====================

@router.get("/api/admin/settings")
def get_settings(admin_service: AdminService = Depends(get_admin_service)):
    return admin_service.get_settings()

@router.put("/api/admin/settings")
def update_settings(request: SettingsUpdateRequest, admin_service: AdminService = Depends(get_admin_service)):
    return admin_service.update_settings(
        grade=request.grade,
        subject=request.subject,
        duration_minutes=request.duration_minutes
    )

@router.post("/api/admin/questions")
def add_question(request: QuestionCreateRequest, admin_service: AdminService = Depends(get_admin_service)):
    return admin_service.add_question(request.text, request.options, request.correct_answer)

@router.delete("/api/admin/questions/{question_id}")
def remove_question(question_id: str, admin_service: AdminService = Depends(get_admin_service)):
    if not admin_service.remove_question(question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    return {"question_id": question_id, "removed": True}

@router.post("/api/admin/generate")
def generate_questions(request: GenerateRequest, admin_service: AdminService = Depends(get_admin_service)):
    """Generate and commit a new question bank, returning the progress trail"""
    progress = []
    outcome = admin_service.generate_questions(request.count, on_progress=progress.append)
    outcome["progress"] = progress
    return outcome

@router.post("/api/admin/generate/stream")
def generate_questions_stream(request: GenerateRequest, admin_service: AdminService = Depends(get_admin_service)):
    """Same as /api/admin/generate, streamed as NDJSON progress events"""
    total = request.count or config.DEFAULT_QUESTION_COUNT
    events = queue.Queue()

    def report(generated: int):
        events.put({"event": "progress", "generated": generated, "total": total})

    def worker():
        try:
            outcome = admin_service.generate_questions(request.count, on_progress=report)
            events.put({"event": "complete", **outcome})
        except Exception as e:
            logger.error(f"Streamed generation failed: {e}", exc_info=True)
            events.put({"event": "error", "message": str(e)})
        finally:
            events.put(None)

    threading.Thread(target=worker, daemon=True).start()

    def stream():
        while True:
            event = events.get()
            if event is None:
                break
            yield json.dumps(event) + "\n"

    return StreamingResponse(stream(), media_type="application/x-ndjson")

@router.get("/api/admin/results")
def list_results(admin_service: AdminService = Depends(get_admin_service)):
    results = admin_service.list_results()
    return {
        "count": len(results),
        "results": results,
        "timestamp": DateTimeUtils.get_current_timestamp()
    }

@router.get("/api/admin/results/{result_id}")
def get_result_detail(result_id: str, admin_service: AdminService = Depends(get_admin_service)):
    detail = admin_service.get_result_detail(result_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Result not found")
    return detail

@router.delete("/api/admin/results")
def clear_results(admin_service: AdminService = Depends(get_admin_service)):
    return admin_service.clear_results()
