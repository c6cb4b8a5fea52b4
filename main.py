"""Backend entry script for local development."""
import uvicorn


if __name__ == "__main__":
    uvicorn.run(
        "building_lens.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
