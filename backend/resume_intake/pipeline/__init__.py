"""
Document pipeline — render an HTML template, print it to PDF, publish it.

The engine (`resume_intake.pipeline.engine.DocumentPipeline`) runs three
steps in strict sequence (render → rasterize → publish) with per-step
logging, a bounded retry on rasterization and structured errors
(`resume_intake.pipeline.errors`) that name the failing stage.

Import from the submodules directly; the rendering and storage layers
depend on `pipeline.errors`, so this package must stay import-free.
"""
