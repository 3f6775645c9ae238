import uvicorn

from babybook.config import settings


def main():
    uvicorn.run("babybook.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
