from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from resume_intake.api.schemas.applicant import RegistrationRequest


def test_loose_form_values_are_normalised() -> None:
    body = RegistrationRequest.model_validate(
        {
            "identificacion": 1020304050,
            "telefono": 3001234567,
            "fecha_nacimiento": "1994-03-08",
            "fecha_expedicion": "",
            "edad": "31",
            "familiares": [{"nombre_completo": "Marta", "edad": "", "conviven_juntos": "1"}],
            "seguridad": {"llamados_atencion": "true", "info_falsa": 0, "acepta_poligrafo": "si"},
        }
    )

    assert body.identificacion == "1020304050"
    assert body.telefono == "3001234567"
    assert body.fecha_nacimiento == date(1994, 3, 8)
    assert body.fecha_expedicion is None
    assert body.edad == 31
    assert body.familiares[0].edad is None
    assert body.familiares[0].conviven_juntos is True
    assert body.seguridad.llamados_atencion is True
    assert body.seguridad.info_falsa is False
    assert body.seguridad.acepta_poligrafo is True
    assert body.seguridad.consume_alcohol is None


def test_null_sections_become_empty_lists() -> None:
    body = RegistrationRequest.model_validate({"identificacion": "1", "educacion": None})

    assert body.educacion == []
    assert body.contacto_emergencia is None


def test_unknown_keys_are_ignored() -> None:
    body = RegistrationRequest.model_validate({"identificacion": "1", "captcha": "x"})

    assert "captcha" not in body.model_dump()


@pytest.mark.parametrize("payload", [{}, {"identificacion": ""}, {"identificacion": "   "}])
def test_identification_is_required(payload) -> None:
    with pytest.raises(ValidationError):
        RegistrationRequest.model_validate(payload)
