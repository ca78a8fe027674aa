"""Habit ledger core library: day record store and analytics engines.

Public API re-exports for convenient imports:
    from habitledger import DayRecordStore, compute_analytics, ...
"""

# Workspace & paths
from habitledger.workspace import (
    data_root,
    get_user_timezone,
    get_export_label,
    today_str,
    now_local,
    ledger_path,
    definitions_path,
    settings_path,
)

# Errors
from habitledger.errors import (
    LedgerError,
    InvalidDateFormat,
    FutureDateNotEditable,
    DayLocked,
    LedgerCorrupt,
)

# Store
from habitledger.store import DayRecordStore, decode_ledger, decode_day_record

# Definitions
from habitledger.definitions import load_definitions, parse_definitions

# Engines
from habitledger.schedule import is_eligible, filter_eligible
from habitledger.scoring import score_model, day_score
from habitledger.badges import resolve_badge, compute_badge_map
from habitledger.streaks import per_habit_streak, global_streak, sign_streak
from habitledger.analytics import average_score, compute_analytics, find_open_day_in_progress
from habitledger.export import compute_habit_history, generate_csv

# Models
from habitledger.models import (
    HabitDefinition,
    Badge,
    Group,
    Definitions,
    DayRecord,
    Ledger,
    ScoreModel,
    SignStreak,
    HabitStreak,
    TimelinePoint,
    BadgeDay,
    Averages,
    AnalyticsSummary,
    OpenDay,
    HabitHistoryDay,
    HabitHistory,
)
