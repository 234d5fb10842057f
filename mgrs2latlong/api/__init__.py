"""HTTP surface (FastAPI) over the detector, converter and row pipeline."""
