"""FastAPI 엔트리포인트.

앱 책임
- 프로젝트 CRUD
- PDF 업로드 및 페이지 인덱싱 잡 등록
- 인덱싱 진행 상태 조회
- 키워드 검색
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from apps.api.src.routes import projects, uploads, search, details
from apps.api.src.services import Services, build_services
from packages.core.src.errors import ConversionError, ValidationError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("api")


def create_app(services: Optional[Services] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "services", None) is None:
            app.state.services = build_services()
        yield
        # 취소 없음: 진행 중인 문서는 끝까지 처리
        await app.state.services.queue.drain()

    app = FastAPI(title="detail-search API", version="0.1.0", lifespan=lifespan)
    app.state.services = services

    app.include_router(projects.router, prefix="/api/projects")
    app.include_router(uploads.router, prefix="/api/projects")
    app.include_router(search.router, prefix="/api/search")
    app.include_router(details.router, prefix="/api/details")

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # 형식이 틀린 요청도 다른 오류와 같은 {"error"} 형태의 400으로 응답
        errors = exc.errors()
        detail = errors[0].get("msg", "") if errors else ""
        message = f"Invalid request: {detail}" if detail else "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(ConversionError)
    async def handle_conversion_error(request: Request, exc: ConversionError):
        logger.error("PDF 변환 실패: %s", exc)
        return JSONResponse(status_code=500, content={"error": "PDF conversion failed"})

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("apps.api.main:app", host="0.0.0.0", port=8000)
