#!/usr/bin/env python
"""Docker entrypoint: serve the chainhook webhook API with uvicorn."""

import os

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "passportx.main:app",
        host=os.getenv("PASSPORTX_HOST", "0.0.0.0"),
        port=int(os.getenv("PASSPORTX_PORT", "3010")),
    )
