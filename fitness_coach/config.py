import argparse
from pathlib import Path
from typing import List, Optional

class Config:
    """
    Central configuration manager for the AI Fitness Coach application.
    Handles command-line argument parsing, debug modes, classifier thresholds,
    risk monitor limits and timer cadences.
    """

    def __init__(self):
        # Application mode settings
        self.debug_mode: str = "debug"
        self.history_path: Path = Path("workout_history.json")

        # Pose detection thresholds
        self.min_confidence: float = 0.5  # Minimum keypoint confidence for upper-body joints
        self.lower_body_min_confidence: float = 0.2  # Knees/hips are tracked less reliably
        self.model_conf_threshold: float = 0.4  # YOLO model confidence threshold
        self.pose_model_path: str = "yolov8n-pose.pt"
        self.video_source = 0

        # Image processing settings
        self.image_width_limit: int = 640  # Resize images larger than this for performance

        # Classifier thresholds (degrees). Enter/exit values differ to form a dead-band.
        self.pushup_down_angle: float = 110
        self.pushup_up_angle: float = 145
        self.armcurl_up_angle: float = 105
        self.armcurl_down_angle: float = 145
        self.jumping_jack_up_angle: float = 60
        self.jumping_jack_down_angle: float = 130
        self.jumping_jack_window: int = 5  # Frames in the rolling angle average

        # Risk monitor limits
        self.cramp_medium_seconds: float = 900
        self.cramp_high_seconds: float = 1800
        self.heart_medium_rpm: float = 10
        self.heart_high_rpm: float = 15

        # Timer cadences (seconds)
        self.exercise_timer_interval: float = 1.0
        self.risk_sample_interval: float = 0.1
        self.risk_eval_interval: float = 1.0  # Minimum real time between risk evaluations
        self.breathing_interval: float = 0.1
        self.scheduler_resolution: float = 0.05
        self.frame_retry_delay: float = 0.1  # First backoff after a failed pose request
        self.frame_retry_max_delay: float = 2.0

        # Exercise mode configuration
        self.supported_modes = ["pushups", "squats", "overhead press", "dumbbell curls", "jumping jacks"]

        # Human-readable descriptions for each debug mode
        self.mode_descriptions = {
            "debug": "Debug Mode (verbose logging)",
            "non_debug": "Non-Debug Mode (minimal logging)"
        }

    def setup_from_args(self, argv: Optional[List[str]] = None):
        """
        Parse command line arguments and configure application settings.
        """
        parser = argparse.ArgumentParser(description="AI Fitness Coach Backend")
        parser.add_argument(
            "--mode",
            choices=["debug", "non_debug"],
            default="debug",
            help="Debug mode setting"
        )
        parser.add_argument(
            "--history",
            type=Path,
            default=self.history_path,
            help="JSON file that stores completed workout summaries"
        )
        args = parser.parse_args(argv)

        self.debug_mode = args.mode
        self.history_path = args.history

    @property
    def mode_description(self) -> str:
        """Get human-readable description of current mode"""
        return self.mode_descriptions[self.debug_mode]

# Global configuration instance - import this in other modules
config = Config()
