#!/usr/bin/env python3
"""
Render the résumé template for a sample applicant without a database.

By default the PDF is written to disk (no storage credentials needed);
--publish runs the full pipeline and uploads it to the configured bucket.

Usage:
    cd backend
    python -m scripts.render_sample [--out sample.pdf] [--publish]
"""

import argparse
import asyncio
from pathlib import Path

from resume_intake.core.config import settings
from resume_intake.core.logging import setup_logging
from resume_intake.rendering.rasterizer import DocumentRasterizer, RasterizerOptions, chromium_launcher
from resume_intake.rendering.resume_fields import build_resume_fields
from resume_intake.rendering.template import FileTemplate, TemplateRenderer

SAMPLE_APPLICANT = {
    "identificacion": "1020304050",
    "tipo_documento": "Cédula de Ciudadanía",
    "primer_nombre": "Laura",
    "primer_apellido": "Gómez",
    "segundo_apellido": "Rincón",
    "fecha_nacimiento": "1994-03-18",
    "edad": 31,
    "estado_civil": "Soltera",
    "ciudad_residencia": "Medellín",
    "departamento_residencia": "Antioquia",
    "direccion_barrio": "Cra 45 # 10-20, El Poblado",
    "telefono": "3001234567",
    "correo_electronico": "laura.gomez@example.com",
    "eps": "Sura",
    "afp": "Protección",
    "rh": "O+",
    "talla_pantalon": "8",
    "camisa_talla": "S",
    "zapatos_talla": "37",
    "educacion": [
        {"institucion": "SENA", "programa": "Tecnología en Logística", "nivel_escolaridad": "Tecnólogo", "ano": "2016"},
    ],
    "experiencia_laboral": [
        {"empresa": "Transportes Andinos", "cargo": "Auxiliar de bodega", "tiempo_laborado": "2 años"},
    ],
    "familiares": [{"nombre_completo": "Marta Rincón", "parentesco": "Madre", "edad": 58}],
    "referencias": [{"tipo_referencia": "Personal", "nombre_completo": "Carlos Ruiz", "telefono": "3109876543"}],
    "contacto_emergencia": {"nombre_completo": "Marta Rincón", "telefono": "3015550000", "parentesco": "Madre"},
    "metas_personales": {"corto_plazo": "Certificarme en manejo de montacargas"},
    "seguridad": {"llamados_atencion": False, "acepta_poligrafo": True, "fortalezas": "Puntualidad"},
}


async def render_to_file(out: Path) -> None:
    fields = build_resume_fields(SAMPLE_APPLICANT)
    fields["LOGO_URL"] = settings.DEFAULT_LOGO_URL

    html = await TemplateRenderer().render(FileTemplate(settings.PDF_TEMPLATE_PATH), fields)
    rasterizer = DocumentRasterizer(
        launcher=chromium_launcher(no_sandbox=settings.BROWSER_NO_SANDBOX),
        options=RasterizerOptions.from_settings(settings),
    )
    pdf = await rasterizer.rasterize(html)
    out.write_bytes(pdf)
    print(f"Wrote {len(pdf)} bytes to {out}")


async def render_and_publish() -> None:
    from resume_intake.pipeline.engine import DocumentPipeline
    from resume_intake.storage.gcs import create_bucket

    pipeline = DocumentPipeline.from_settings(settings, create_bucket(settings))
    artifact = await pipeline.generate_and_publish(
        SAMPLE_APPLICANT["identificacion"],
        build_resume_fields(SAMPLE_APPLICANT),
        settings.PDF_KEY_PREFIX,
    )
    print(f"Published {artifact.storage_key}")
    print(f"  url:    {artifact.access_url}")
    print(f"  signed: {artifact.signed}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--out", type=Path, default=Path("sample_resume.pdf"))
    parser.add_argument("--publish", action="store_true", help="upload through the full pipeline")
    args = parser.parse_args()

    setup_logging("DEBUG")
    if args.publish:
        asyncio.run(render_and_publish())
    else:
        asyncio.run(render_to_file(args.out))


if __name__ == "__main__":
    main()
