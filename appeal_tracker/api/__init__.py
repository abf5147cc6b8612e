# This file marks the API package: FastAPI app, config, store access, and appeal lifecycle rules.
