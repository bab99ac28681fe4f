"""
Shared fixtures: in-memory fakes for the browser and the bucket, an
aiosqlite database and an HTTP client bound to the FastAPI app.
"""

from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from resume_intake.db.models import Base
from resume_intake.pipeline.engine import DocumentPipeline
from resume_intake.rendering.rasterizer import DocumentRasterizer, RasterizerOptions
from resume_intake.rendering.template import InlineTemplate, TemplateRenderer
from resume_intake.storage.publisher import ObjectStorePublisher

PDF_BYTES = b"%PDF-1.7\n% fake document\n%%EOF"

SIMPLE_TEMPLATE = (
    "<html><body>"
    '<img src="{{ LOGO_URL }}" onerror="this.remove()">'
    "<h1>{{ NOMBRE_COMPLETO }}</h1><p>{{ IDENTIFICACION }}</p>"
    "</body></html>"
)


# ═══════════════════════════════════════════════════════════
#  Object storage fakes
# ═══════════════════════════════════════════════════════════

class FakeBlob:
    def __init__(self, bucket: FakeBucket, name: str) -> None:
        self.bucket = bucket
        self.name = name
        self.metadata: dict[str, str] | None = None
        self.size: int | None = None
        self.data: bytes | None = None
        self.content_type: str | None = None

    def upload_from_string(self, data: bytes, content_type: str | None = None) -> None:
        if self.bucket.upload_error is not None:
            raise self.bucket.upload_error
        self.data = data
        self.content_type = content_type
        self.size = self.bucket.reported_size if self.bucket.reported_size is not None else len(data)
        self.bucket.uploads.append(self)

    def generate_signed_url(self, **kwargs: Any) -> str:
        self.bucket.sign_calls.append(kwargs)
        if self.bucket.sign_error is not None:
            raise self.bucket.sign_error
        return f"https://signed.example/{self.bucket.name}/{self.name}?X-Goog-Signature=abc"


class FakeBucket:
    """Same `name` / `blob(key)` surface as google.cloud.storage.Bucket."""

    def __init__(self, name: str = "test-bucket") -> None:
        self.name = name
        self.uploads: list[FakeBlob] = []
        self.sign_calls: list[dict[str, Any]] = []
        self.upload_error: Exception | None = None
        self.sign_error: Exception | None = None
        self.reported_size: int | None = None

    def blob(self, name: str) -> FakeBlob:
        return FakeBlob(self, name)

    @property
    def keys(self) -> list[str]:
        return [b.name for b in self.uploads]


# ═══════════════════════════════════════════════════════════
#  Browser fakes
# ═══════════════════════════════════════════════════════════

class FakePage:
    def __init__(self, browser: FakeBrowser) -> None:
        self.browser = browser
        self.content: str | None = None
        self.calls: list[str] = []

    async def set_content(self, html: str, **kwargs: Any) -> None:
        self.calls.append("set_content")
        self.browser.set_content_kwargs = kwargs
        if self.browser.set_content_error is not None:
            raise self.browser.set_content_error
        self.content = html

    async def wait_for_function(self, expression: str, **kwargs: Any) -> None:
        self.calls.append("wait_for_function")
        if self.browser.image_wait_error is not None:
            raise self.browser.image_wait_error

    async def wait_for_timeout(self, ms: int) -> None:
        self.calls.append(f"wait_for_timeout:{ms}")

    async def pdf(self, **kwargs: Any) -> bytes:
        self.calls.append("pdf")
        self.browser.pdf_kwargs = kwargs
        if self.browser.pdf_error is not None:
            raise self.browser.pdf_error
        return self.browser.pdf_bytes


class FakeBrowser:
    def __init__(self) -> None:
        self.pages: list[FakePage] = []
        self.close_count = 0
        self.new_page_kwargs: dict[str, Any] = {}
        self.set_content_kwargs: dict[str, Any] = {}
        self.pdf_kwargs: dict[str, Any] = {}
        self.set_content_error: BaseException | None = None
        self.image_wait_error: BaseException | None = None
        self.pdf_error: BaseException | None = None
        self.pdf_bytes: bytes = PDF_BYTES

    async def new_page(self, **kwargs: Any) -> FakePage:
        self.new_page_kwargs = kwargs
        page = FakePage(self)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.close_count += 1


class FakeLauncher:
    """Callable launcher; hands out one FakeBrowser per launch."""

    def __init__(self, configure=None) -> None:
        self.browsers: list[FakeBrowser] = []
        self.launch_error: BaseException | None = None
        self._configure = configure

    async def __call__(self) -> FakeBrowser:
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser()
        if self._configure is not None:
            self._configure(browser, len(self.browsers) + 1)
        self.browsers.append(browser)
        return browser

    @property
    def launch_count(self) -> int:
        return len(self.browsers)

    @property
    def close_count(self) -> int:
        return sum(b.close_count for b in self.browsers)


# ═══════════════════════════════════════════════════════════
#  Fixtures
# ═══════════════════════════════════════════════════════════

@pytest.fixture
def fake_bucket() -> FakeBucket:
    return FakeBucket()


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def make_launcher():
    """FakeLauncher factory; `configure(browser, launch_number)` tweaks each browser."""
    return FakeLauncher


@pytest.fixture
def fast_options() -> RasterizerOptions:
    return RasterizerOptions(settle_delay_ms=0, timeout_ms=2_000)


@pytest.fixture
def make_pipeline(fake_bucket: FakeBucket, fast_options: RasterizerOptions):
    """Build a DocumentPipeline over fakes; keyword overrides allowed."""

    def _make(
        *,
        template=None,
        launcher: FakeLauncher | None = None,
        bucket: FakeBucket | None = None,
        rasterize_attempts: int = 1,
    ) -> DocumentPipeline:
        return DocumentPipeline(
            renderer=TemplateRenderer(),
            template=template or InlineTemplate(SIMPLE_TEMPLATE),
            rasterizer=DocumentRasterizer(launcher=launcher or FakeLauncher(), options=fast_options),
            publisher=ObjectStorePublisher(bucket or fake_bucket),
            default_logo_url="https://cdn.example/logo.png",
            rasterize_attempts=rasterize_attempts,
            retry_backoff_seconds=0,
        )

    return _make


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory SQLite schema per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def api_client(session_factory, make_pipeline, fake_bucket):
    """AsyncClient over the app with the DB and pipeline swapped for fakes."""
    from resume_intake.api.deps import get_db
    from resume_intake.main import app

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    app.state.document_pipeline = make_pipeline()
    app.state.publisher = ObjectStorePublisher(fake_bucket)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()
    del app.state.document_pipeline
    del app.state.publisher
