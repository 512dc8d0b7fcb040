import uvicorn

from fitness_coach.config import config
from fitness_coach.utils.logging_utils import apply_debug_mode

def main():
    config.setup_from_args()
    apply_debug_mode()

    from fitness_coach.main import app

    # Display startup information with available command-line options
    print("\n" + "="*60)
    print("AI Fitness Coach Backend")
    print("="*60)
    print(f"Mode: {config.mode_description}")
    print(f"History file: {config.history_path}")
    print("\nAvailable modes:")
    print("  fitness-coach --mode debug      # Verbose logging")
    print("  fitness-coach --mode non_debug  # Minimal logging only")
    print("="*60 + "\n")

    # Start FastAPI server with CORS enabled for cross-origin requests
    uvicorn.run(app, host="0.0.0.0", port=8000)

if __name__ == "__main__":
    main()
