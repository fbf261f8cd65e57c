"""
File-backed storage of recently generated plans and the last user profile.
"""
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path

from fitplan.core.errors import PlanStoreError
from fitplan.core.logger import logger, log_error
from fitplan.models.plan import FitnessPlan, SavedPlan
from fitplan.models.user import UserProfile


PLANS_FILE = "fitness_plans.json"
USER_DATA_FILE = "user_data.json"


class PlanStore:
    """
    Keeps the most recent plans, newest first, as JSON on disk.

    Saved entries are independent snapshots: later changes to a live plan
    object never reach the stored copy.
    """

    def __init__(self, directory: str | Path, max_plans: int = 10):
        self.directory = Path(directory)
        self.max_plans = max_plans
        self.plans_path = self.directory / PLANS_FILE
        self.user_data_path = self.directory / USER_DATA_FILE

    def _write(self, path: Path, data) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(path)

    def _read(self, path: Path):
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    # --- Plans ---

    def load_plans(self) -> list[SavedPlan]:
        """All saved plans, newest first; empty if the file is missing or unreadable."""
        try:
            data = self._read(self.plans_path) or []
            return [SavedPlan.model_validate(item) for item in data]
        except Exception as e:
            log_error("Loading saved plans", e)
            return []

    def get_plan(self, plan_id: str) -> SavedPlan | None:
        return next((p for p in self.load_plans() if p.id == plan_id), None)

    def save_plan(self, plan: FitnessPlan, user_data: UserProfile) -> SavedPlan:
        """
        Store a snapshot of ``plan`` with a fresh id and save time.

        Raises:
            PlanStoreError: If the store cannot be written
        """
        snapshot = SavedPlan.model_validate({
            **plan.model_dump(mode="json", exclude_unset=True),
            "userData": user_data.model_dump(mode="json", exclude_none=True),
            "id": uuid.uuid4().hex,
            "createdAt": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        })

        plans = [snapshot, *self.load_plans()][:self.max_plans]

        try:
            self._write(self.plans_path, [self._dump(p) for p in plans])
        except OSError as e:
            log_error("Saving plan", e)
            raise PlanStoreError("Failed to save plan") from e

        logger.info(f"Saved plan {snapshot.id} ({len(plans)} stored)")
        return snapshot

    def delete_plan(self, plan_id: str) -> list[SavedPlan]:
        """Remove one plan; returns the remaining plans."""
        plans = [p for p in self.load_plans() if p.id != plan_id]
        try:
            self._write(self.plans_path, [self._dump(p) for p in plans])
        except OSError as e:
            log_error("Deleting plan", e)
            raise PlanStoreError("Failed to delete plan") from e
        return plans

    @staticmethod
    def _dump(plan: SavedPlan) -> dict:
        return plan.model_dump(mode="json", exclude_unset=True)

    # --- User data ---

    def save_user_data(self, user_data: UserProfile) -> None:
        """
        Remember the last submitted profile.

        Raises:
            PlanStoreError: If the store cannot be written
        """
        try:
            self._write(self.user_data_path, user_data.model_dump(mode="json", exclude_none=True))
        except OSError as e:
            log_error("Saving user data", e)
            raise PlanStoreError("Failed to save user data") from e

    def load_user_data(self) -> UserProfile | None:
        try:
            data = self._read(self.user_data_path)
            return UserProfile.model_validate(data) if data else None
        except Exception as e:
            log_error("Loading user data", e)
            return None

    def clear_all_data(self) -> None:
        """Remove both files; raises PlanStoreError if either is left behind."""
        failed = []
        for path in (self.plans_path, self.user_data_path):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                log_error("Clearing data", e)
                failed.append(path.name)
        if failed:
            raise PlanStoreError(f"Failed to clear {', '.join(failed)}")
