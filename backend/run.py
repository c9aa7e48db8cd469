import sys
from pathlib import Path

# Ensure we can import the app when run from a source checkout
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

def main():
    try:
        import uvicorn
        from careerguide.config import settings
        from careerguide.main import app

    except ImportError as e:
        print(f"Import error: {e}")
        print("Make sure you've installed: pip install -e .")
        sys.exit(1)

    print(f"Server: http://{settings.HOST}:{settings.PORT}")
    print(f"API Docs: http://{settings.HOST}:{settings.PORT}/docs")

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )

if __name__ == "__main__":
    main()
