"""Business flow layer.

Importing any module from this package triggers dependency registration via
the import below, so CLI/tests don't need to care about DI initialization.
"""

import holiday_calendar.core.container  # noqa: F401 - Trigger dependency registration
