from fastapi import FastAPI, HTTPException

from api.app import create_app

try:
    app = create_app()
except RuntimeError:
    app = FastAPI(title="mq bridge", version="0.1.0")

    @app.get("/")
    async def api_disabled() -> dict[str, str]:
        raise HTTPException(
            status_code=503,
            detail="Local API disabled. Enable by setting enable_local_api = true in config.toml",
        )


if __name__ == "__main__":
    import uvicorn

    from mq_bridge.settings import prepare_config

    api_config = prepare_config().api
    uvicorn.run(app, host=api_config.host, port=api_config.port)
