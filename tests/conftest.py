"""Shared pytest setup."""

import os
import tempfile

# Keep the app's data root out of the user's home directory during tests.
# Must run before skill_tracker.config is imported.
os.environ.setdefault("DATA_ROOT", tempfile.mkdtemp(prefix="skill_tracker_test_"))
os.environ.setdefault("SEED_DEMO_DATA", "false")
