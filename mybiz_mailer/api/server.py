import uvicorn
from ..core.config import settings


def run():
    uvicorn.run("mybiz_mailer.api.main:app", host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()
