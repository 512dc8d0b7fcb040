import asyncio
from typing import Optional

import cv2
import numpy as np
from ultralytics import YOLO

from fitness_coach.config import config
from fitness_coach.models.schemas import PoseSnapshot, snapshot_from_array
from fitness_coach.services.frame_loop import EndOfStream
from fitness_coach.utils.logging_utils import logger

class PoseService:
    """
    YOLO-based pose detection service.
    Handles model initialization, image preprocessing, and conversion of the
    first detected person into a named PoseSnapshot.
    """

    def __init__(self):
        self.model = None

    async def initialize(self):
        """
        Initialize YOLO pose detection model and perform warm-up inference.
        """
        logger.info("Loading YOLO pose model...")
        self.model = YOLO(config.pose_model_path)

        # Warm up model with dummy inference to optimize subsequent calls
        dummy = np.zeros((480, 640, 3), dtype=np.uint8)
        _ = self.model(dummy, verbose=False)

        logger.info("Pose model loaded successfully!")

    def detect_pose(self, img: np.ndarray) -> Optional[PoseSnapshot]:
        """
        Detect pose keypoints in image with automatic resize for performance.
        Returns a PoseSnapshot in original image coordinates, or None if no person was found.
        """
        if not self.model:
            raise RuntimeError("Model not initialized")

        # Resize large images for performance while maintaining aspect ratio
        height, width = img.shape[:2]
        scale = 1.0
        if width > config.image_width_limit:
            scale = config.image_width_limit / width
            img = cv2.resize(img, (int(width * scale), int(height * scale)))

        results = self.model(img, verbose=False, conf=config.model_conf_threshold)

        # Extract first detected person's keypoints
        if results[0].keypoints is None or len(results[0].keypoints.data) == 0:
            return None

        keypoints = results[0].keypoints.data[0].cpu().numpy().copy()
        keypoints[:, :2] /= scale
        return snapshot_from_array(keypoints)

    def decode_image(self, contents: bytes) -> Optional[np.ndarray]:
        """Decode an uploaded JPEG/PNG frame, None when the bytes are not an image"""
        nparr = np.frombuffer(contents, np.uint8)
        return cv2.imdecode(nparr, cv2.IMREAD_COLOR)


class VideoPoseSource:
    """
    Reads frames from an OpenCV capture device or file and runs pose detection.
    Each call awaits one inference; blocking work runs in the default executor.
    A video file that runs out of frames raises EndOfStream.
    """

    def __init__(self, service: PoseService, video_source=None):
        self.service = service
        self.video_source = config.video_source if video_source is None else video_source
        self.capture = None

    @property
    def is_file(self) -> bool:
        source = self.video_source
        return isinstance(source, str) and not source.isdigit() and "://" not in source

    def open(self):
        self.capture = cv2.VideoCapture(self.video_source)
        if not self.capture.isOpened():
            raise RuntimeError(f"Cannot open video source {self.video_source}")
        logger.info(f"Video source opened: {self.video_source}")

    def _read_and_detect(self) -> Optional[PoseSnapshot]:
        ok, frame = self.capture.read()
        if not ok:
            if self.is_file:
                raise EndOfStream(f"End of video file {self.video_source}")
            raise RuntimeError("Failed to read frame from video source")
        return self.service.detect_pose(frame)

    async def __call__(self) -> Optional[PoseSnapshot]:
        if self.capture is None:
            self.open()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_and_detect)

    def close(self):
        if self.capture is not None:
            self.capture.release()
            self.capture = None

# Global service instance
pose_service = PoseService()
