# main.py
import time
from typing import List, Optional

from fastapi import Body, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from fitness_coach.config import config
from fitness_coach.models.exercise_catalog import EXERCISE_CATALOG, ExerciseDefinition, WorkoutPlan
from fitness_coach.models.schemas import WorkoutState, WorkoutSummary
from fitness_coach.models.workout_session import SessionStateError
from fitness_coach.services.coach_service import CoachService
from fitness_coach.services.history_service import history_store
from fitness_coach.services.pose_service import VideoPoseSource, pose_service
from fitness_coach.utils.logging_utils import logger

# Initialize FastAPI application
app = FastAPI(title="AI Fitness Coach Backend")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Single in-memory coaching session shared by all requests
coach = CoachService(history_store=history_store)
video_source: Optional[VideoPoseSource] = None

@app.on_event("startup")
async def startup_event():
    """Load the pose model and start the periodic timers"""
    history_store.path = config.history_path
    await pose_service.initialize()
    coach.start_timers()
    logger.info(f"Supported exercises: {config.supported_modes}")

@app.on_event("shutdown")
async def shutdown_event():
    """Wait for the frame loop to settle before releasing the capture device"""
    await coach.shutdown()
    if video_source is not None:
        video_source.close()

@app.post("/workout/start", response_model=WorkoutState)
async def start_workout(plan: Optional[WorkoutPlan] = Body(None)):
    """Start the default plan, or the plan given in the request body"""
    try:
        return coach.start_workout(plan)
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

@app.post("/analyze_frame", response_model=WorkoutState)
async def analyze_frame(file: UploadFile = File(...)):
    """
    Core endpoint for exercise analysis from uploaded image frames.
    Detects pose keypoints, routes them to the active exercise and returns the workout state.
    """
    if not pose_service.model:
        raise HTTPException(status_code=500, detail="Model not loaded")

    contents = await file.read()
    img = pose_service.decode_image(contents)
    if img is None:
        raise HTTPException(status_code=400, detail="Invalid image")

    try:
        snapshot = pose_service.detect_pose(img)
    except Exception as e:
        # Inference failures only cost this frame
        logger.error(f"Error processing frame: {e}")
        snapshot = None

    if snapshot is None:
        logger.debug("No pose detected")
    else:
        coach.process_frame(snapshot)

    return coach.state()

@app.post("/workout/advance", response_model=WorkoutState)
async def advance_workout():
    """Move to the next exercise, or complete the workout after the last one"""
    try:
        return coach.advance()
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

@app.post("/workout/abandon", response_model=WorkoutState)
async def abandon_workout():
    """Reset the workout session to idle without saving a summary"""
    try:
        state = coach.abandon()
        logger.info("Session reset successfully")
        return state
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

@app.get("/workout/state", response_model=WorkoutState)
async def workout_state():
    return coach.state()

@app.post("/camera/start", response_model=WorkoutState)
async def start_camera():
    """Drive the session from the configured video source instead of uploads"""
    global video_source
    if not pose_service.model:
        raise HTTPException(status_code=500, detail="Model not loaded")

    if video_source is None:
        video_source = VideoPoseSource(pose_service)
    await coach.start_frame_loop(video_source)
    return coach.state()

@app.post("/camera/stop", response_model=WorkoutState)
async def stop_camera():
    await coach.stop_frame_loop()
    return coach.state()

@app.get("/exercises", response_model=List[ExerciseDefinition])
async def list_exercises():
    return list(EXERCISE_CATALOG.values())

@app.get("/history", response_model=List[WorkoutSummary])
async def workout_history():
    return history_store.load_workout_history()

@app.get("/health")
async def health_check():
    """Simple health check endpoint for service monitoring"""
    return {"status": "healthy", "timestamp": time.time()}
