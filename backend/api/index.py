"""Serverless function handler for the FastAPI app."""

from mangum import Mangum

from vidto.main import app

# Mangum adapts the ASGI app to Lambda-style serverless handlers
handler = Mangum(app, lifespan="auto")
