"""Object storage: GCS client factory and the document/photo publisher."""
