"""Live run tracking: GPS/heart-rate ingestion, smoothed pace and coaching cues."""
