"""Problem logger - records generated problems for later review."""

import json
import os
import uuid
from datetime import datetime
from typing import List

from wwyd.generator.hand_generator import GeneratedProblem

LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__)))), "logs")


class ProblemLogger:
    """Collects the problems of one session and writes them to a JSON file."""

    def __init__(self, hand_name: str, config_info: dict):
        self.session_id = uuid.uuid4().hex[:12]
        self.timestamp = datetime.now().isoformat()
        self.hand_name = hand_name
        self.config_info = config_info

        self.problems: List[dict] = []

    def record(self, problem: GeneratedProblem) -> dict:
        """Add a problem to the session, numbered from 1."""
        entry = {"problem_id": len(self.problems) + 1}
        entry.update(problem.to_dict())
        self.problems.append(entry)
        return entry

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "timestamp": self.timestamp,
            "hand": self.hand_name,
            "config": self.config_info,
            "problems": self.problems,
        }

    def save(self, log_dir: str = LOG_DIR) -> str:
        """Save the session to ``log_dir`` and return the file path."""
        os.makedirs(log_dir, exist_ok=True)

        filename = f"wwyd_{self.session_id}.json"
        filepath = os.path.join(log_dir, filename)

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

        return filepath
