import logging
import ffmpeg

logger = logging.getLogger(__name__)

def probe_duration(video_path: str) -> float | None:
    """
    Probe container metadata and return the duration in seconds,
    or None when it cannot be determined.
    """
    try:
        probe = ffmpeg.probe(video_path)
    except ffmpeg.Error as e:
        logger.warning(f"Could not probe video duration for {video_path}: {e.stderr.decode() if e.stderr else e}")
        return None
    except FileNotFoundError:
        logger.warning("ffprobe not found in PATH, duration unavailable")
        return None

    duration = float(probe.get("format", {}).get("duration", 0.0) or 0.0)
    if duration <= 0:
        for stream in probe.get("streams", []):
            if stream.get("codec_type") == "video":
                duration = float(stream.get("duration", 0.0) or 0.0)
                if duration > 0:
                    break
    return duration if duration > 0 else None
