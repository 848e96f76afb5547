#!/usr/bin/env python
"""TaskIQ worker entry point."""

# Import broker and tasks to ensure they are registered
from availability_engine.tasks.broker import broker, scheduler
from availability_engine.tasks.lifecycle_tasks import advance_assignments_task

# TaskIQ CLI uses these module-level objects:
#   taskiq worker worker:broker
#   taskiq scheduler worker:scheduler
