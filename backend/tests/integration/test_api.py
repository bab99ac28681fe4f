from __future__ import annotations

import pytest

from resume_intake.repositories import catalogs as catalog_repository

REGISTRATION = {
    "identificacion": "1020304050",
    "tipo_documento": "Cédula de Ciudadanía",
    "primer_nombre": "Laura",
    "primer_apellido": "Gómez",
    "fecha_nacimiento": "1994-03-08",
    "edad": "31",
    "ciudad_residencia": "Medellín",
    "departamento_residencia": "Antioquia",
    "educacion": [{"institucion": "SENA", "programa": "Logística", "finalizado": "1"}],
    "experiencia_laboral": [{"empresa": "", "cargo": ""}],
    "referencias": [{"tipo_referencia": "Personal", "nombre_completo": "Carlos"}],
    "seguridad": {"llamados_atencion": "0", "acepta_poligrafo": "true"},
}


@pytest.mark.asyncio
async def test_health(api_client) -> None:
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_register_generates_pdf_and_stores_applicant(api_client, fake_bucket) -> None:
    response = await api_client.post("/api/hv/registrar", json=REGISTRATION)

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["success"] is True
    assert body["pdf_generated"] is True
    assert body["pdf_url"].startswith("https://signed.example/test-bucket/1020304050/hoja_vida_")
    assert "warning" not in body
    assert fake_bucket.keys[0].startswith("1020304050/hoja_vida_")

    lookup = (await api_client.get("/api/aspirante", params={"identificacion": "1020304050"})).json()
    assert lookup["existe"] is True
    assert lookup["aspirante"]["id_aspirante"] == body["id_aspirante"]
    assert lookup["aspirante"]["pdf_gcs_path"] == fake_bucket.keys[0]
    assert lookup["aspirante"]["ciudad"] == "Medellín"
    assert lookup["educacion"][0]["finalizado"] is True
    assert lookup["experiencia_laboral"] == []
    assert lookup["seguridad"]["llamados_atencion"] is False


@pytest.mark.asyncio
async def test_register_survives_pdf_failure(api_client, fake_bucket) -> None:
    fake_bucket.upload_error = ConnectionError("bucket unreachable")

    response = await api_client.post("/api/hv/registrar", json=REGISTRATION)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["pdf_generated"] is False
    assert body["pdf_url"] is None
    assert body["warning"].startswith("El PDF no se pudo generar")

    lookup = (await api_client.get("/api/aspirante", params={"identificacion": "1020304050"})).json()
    assert lookup["aspirante"]["pdf_gcs_path"] is None


@pytest.mark.asyncio
async def test_register_twice_keeps_one_applicant(api_client) -> None:
    first = (await api_client.post("/api/hv/registrar", json=REGISTRATION)).json()
    second = (
        await api_client.post("/api/hv/registrar", json={**REGISTRATION, "educacion": []})
    ).json()

    assert first["id_aspirante"] == second["id_aspirante"]
    lookup = (await api_client.get("/api/aspirante", params={"identificacion": "1020304050"})).json()
    assert lookup["educacion"] == []


@pytest.mark.asyncio
async def test_register_requires_identification(api_client) -> None:
    response = await api_client.post("/api/hv/registrar", json={"primer_nombre": "Ana"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_lookup_unknown_applicant(api_client) -> None:
    response = await api_client.get("/api/aspirante", params={"identificacion": "000"})

    assert response.status_code == 200
    assert response.json() == {"existe": False}


@pytest.mark.asyncio
async def test_lookup_without_identification_is_bad_request(api_client) -> None:
    response = await api_client.get("/api/aspirante")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_photo_links_existing_applicant(api_client, fake_bucket) -> None:
    await api_client.post("/api/hv/registrar", json=REGISTRATION)

    response = await api_client.post(
        "/api/hv/upload-photo",
        data={"identificacion": "1020304050"},
        files={"photo": ("mi foto.jpg", b"\xff\xd8\xff\xe0jpeg-bytes", "image/jpeg")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["foto_gcs_path"].startswith("1020304050/")
    assert body["foto_gcs_path"].endswith("_mi_foto.jpg")
    assert body["message"] == "Signed URL generada"

    lookup = (await api_client.get("/api/aspirante", params={"identificacion": "1020304050"})).json()
    assert lookup["aspirante"]["foto_gcs_path"] == body["foto_gcs_path"]


@pytest.mark.asyncio
async def test_upload_photo_falls_back_to_public_url(api_client, fake_bucket) -> None:
    fake_bucket.sign_error = RuntimeError("no key")

    response = await api_client.post(
        "/api/hv/upload-photo",
        data={"identificacion": "555"},
        files={"photo": ("p.png", b"png-bytes", "image/png")},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["foto_public_url"] == f"https://storage.googleapis.com/test-bucket/{body['foto_gcs_path']}"
    assert body["message"] == "Archivo subido; fallback a URL pública"


@pytest.mark.asyncio
async def test_upload_photo_rejects_oversized_files(api_client, fake_bucket, monkeypatch) -> None:
    from resume_intake.core.config import settings

    monkeypatch.setattr(settings, "PHOTO_MAX_BYTES", 10)

    response = await api_client.post(
        "/api/hv/upload-photo",
        data={"identificacion": "555"},
        files={"photo": ("big.jpg", b"x" * 11, "image/jpeg")},
    )

    assert response.status_code == 413
    assert fake_bucket.uploads == []


@pytest.mark.asyncio
async def test_config_lookups(api_client, session_factory) -> None:
    async with session_factory() as session:
        await catalog_repository.seed_catalogs(
            session,
            {
                "tipo_identificacion": ["Pasaporte"],
                "eps": ["Sura", "Compensar"],
                "pension": ["Colpensiones"],
                "departamentos": {"Antioquia": ["Medellín"], "Atlántico": ["Soledad"]},
            },
        )
        await session.commit()

    assert (await api_client.get("/api/config/tipo-identificacion")).json() == [{"descripcion": "Pasaporte"}]
    assert (await api_client.get("/api/config/eps")).json() == [{"eps": "Compensar"}, {"eps": "Sura"}]
    assert (await api_client.get("/api/config/pension")).json() == [{"pension": "Colpensiones"}]
    assert (await api_client.get("/api/config/departamentos")).json() == [
        {"departamento": "Antioquia"},
        {"departamento": "Atlántico"},
    ]
    cities = await api_client.get("/api/config/ciudades", params={"departamento": "Antioquia"})
    assert cities.json() == [{"ciudad": "Medellín"}]


@pytest.mark.asyncio
async def test_cities_require_department(api_client) -> None:
    response = await api_client.get("/api/config/ciudades")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_regenerate_queues_task_for_known_applicant(api_client, monkeypatch) -> None:
    from resume_intake.tasks import document_tasks

    queued: list[str] = []

    class FakeAsyncResult:
        id = "task-123"

    def fake_delay(identificacion: str) -> FakeAsyncResult:
        queued.append(identificacion)
        return FakeAsyncResult()

    monkeypatch.setattr(document_tasks.regenerate_resume_pdf, "delay", fake_delay)
    await api_client.post("/api/hv/registrar", json=REGISTRATION)

    response = await api_client.post("/api/hv/1020304050/pdf")

    assert response.status_code == 202
    assert response.json() == {"message": "Regeneración de PDF en cola", "task_id": "task-123", "status": "PENDING"}
    assert queued == ["1020304050"]


@pytest.mark.asyncio
async def test_regenerate_unknown_applicant_is_404(api_client) -> None:
    response = await api_client.post("/api/hv/000/pdf")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_upload_photo_storage_failure_is_reported(api_client, fake_bucket) -> None:
    fake_bucket.upload_error = ConnectionError("bucket unreachable")

    response = await api_client.post(
        "/api/hv/upload-photo",
        data={"identificacion": "555"},
        files={"photo": ("p.png", b"png-bytes", "image/png")},
    )

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Error subiendo archivo a storage"}
