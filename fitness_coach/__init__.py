"""AI Fitness Coach: rep counting, session sequencing and safety cues from 2-D pose keypoints."""

__version__ = "0.1.0"
