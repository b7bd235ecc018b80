import json
import os
import time
import uuid
from datetime import datetime
import atexit
import logging

import numpy as np

from handlebar.configs.constants import manipulation

logger = logging.getLogger(__name__)


def setup_root_logger(level: int = logging.DEBUG):
    """Configure the root logger only once (no-op if already configured)."""
    root = logging.getLogger()
    if root.handlers:
        # Configuration already exists – just raise the level if needed
        if root.level > level:
            root.setLevel(level)
        return

    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(asctime)s %(processName)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


class RotationLogger:
    """Records one entry per handlebar update to a JSON file.

    Frames are buffered and flushed every ``write_batch_size`` frames and on
    :meth:`close`.  Writes go through a temporary file and an atomic rename.
    """
    def __init__(self, log_dir=manipulation.LOG_DIR, prefix=manipulation.LOG_PREFIX,
                 write_batch_size=manipulation.LOG_WRITE_BATCH_SIZE):
        self.log_dir = log_dir
        self.prefix = prefix
        # Unique per instance so concurrent sessions never share a file
        self.session_id = f"{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}_{uuid.uuid4().hex[:8]}"
        self.write_batch_size = write_batch_size
        self.log_file = os.path.join(self.log_dir, f"{prefix}_log_{self.session_id}.json")
        self.data = {}  # frame number -> frame dict, cleared after each save
        self.frame_count = 0
        self._closed = False

        os.makedirs(self.log_dir, exist_ok=True)
        if not os.path.exists(self.log_file):
            with open(self.log_file, 'w') as f:
                json.dump({
                    "session_id": self.session_id,
                    "frames": {},
                    "total_frames": 0
                }, f, indent=2)
        logger.info(f"Rotation logger initialized. Writing to: {self.log_file}")

        # Flush buffered frames if the process exits without close()
        atexit.register(self._cleanup)

    @property
    def closed(self):
        return self._closed

    def _convert_numpy_to_list(self, data):
        """Convert numpy arrays to lists for JSON serialization."""
        if isinstance(data, np.ndarray):
            return data.tolist()
        if isinstance(data, np.generic):
            return data.item()
        return data

    def log_frame(self, previous_direction, current_direction, angle_rad, axis, orientation):
        """Log a single handlebar update."""
        if self._closed:
            raise RuntimeError("Cannot log to closed logger")

        frame_data = {
            "previous_direction": self._convert_numpy_to_list(previous_direction),
            "current_direction": self._convert_numpy_to_list(current_direction),
            "angle_rad": self._convert_numpy_to_list(angle_rad),
            "axis": self._convert_numpy_to_list(axis),
            "orientation_xyzw": self._convert_numpy_to_list(orientation),
            "timestamp": time.time(),
            "frame": self.frame_count
        }
        self.data[str(self.frame_count)] = frame_data
        self.frame_count += 1

        if self.frame_count % self.write_batch_size == 0:
            if self._save_json(self.log_file):
                self.data = {}  # Only clear data after successful save

    def _save_json(self, filename):
        """Merge buffered frames into *filename*. Returns False on failure."""
        temp_filename = filename + '.tmp'
        try:
            file_data = {
                "session_id": self.session_id,
                "frames": {},
                "total_frames": 0
            }
            if os.path.exists(filename):
                with open(filename, 'r') as f:
                    try:
                        file_data = json.load(f)
                    except json.JSONDecodeError as e:
                        logger.warning(f"Could not load existing log data, starting fresh: {e}")

            file_data['frames'].update(self.data)
            file_data['total_frames'] = len(file_data['frames'])

            with open(temp_filename, 'w') as f:
                json.dump(file_data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_filename, filename)
            return True
        except OSError as e:
            logger.error(f"Error saving log file: {e}")
            if os.path.exists(temp_filename):
                os.remove(temp_filename)
            return False

    def _cleanup(self):
        """Ensure all data is saved when the process exits"""
        if not self._closed:
            self.close()

    def close(self):
        """Save any remaining frames. Further logging raises."""
        if self._closed:
            return

        if self.data:
            logger.info(f"Saving final {len(self.data)} frames for {self.prefix}...")
            if self._save_json(self.log_file):
                self.data = {}
            else:
                logger.warning("Failed to save final log data")

        self._closed = True
