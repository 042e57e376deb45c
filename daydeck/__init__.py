"""DayDeck core library: quick-add parsing, habit streaks and workspace stores.

Public API re-exports for convenient imports:
    from daydeck import parse_quick_input, compute_streak, quick_add, ...
"""

# Parsing & streaks
from daydeck.quick_input import parse_quick_input
from daydeck.streaks import compute_streak

# Workspace & settings
from daydeck.workspace import (
    workspace_root,
    load_settings,
    save_settings,
    update_settings,
    get_user_timezone,
    now_local,
    today_str,
    settings_path,
    notes_path,
    tasks_path,
    habits_path,
    reflections_path,
    focus_path,
)

# File I/O
from daydeck.fileio import (
    read_json,
    read_yaml,
    write_json_atomic,
    write_yaml_atomic,
)

# Stores
from daydeck.notes import (
    load_notes,
    save_notes,
    create_note,
    update_note,
    delete_note,
    archive_note,
    search_notes,
    get_daily_note,
    get_or_create_daily_note,
)
from daydeck.tasks import (
    validate_task,
    load_tasks,
    save_tasks,
    find_task,
    create_task,
    update_task,
    toggle_task,
    archive_task,
    delete_task,
    search_tasks,
    upcoming_tasks,
    completed_tasks,
)
from daydeck.habits import (
    load_habits,
    save_habits,
    create_habit,
    delete_habit,
    toggle_habit_completion,
    habits_with_streaks,
    completions_for_week,
)
from daydeck.reflections import (
    load_reflections,
    save_reflections,
    get_or_create_weekly_reflection,
    update_weekly_reflection,
    weekly_review,
)
from daydeck.quick_add import preview, quick_add

# Models
from daydeck.models import (
    ParsedInput,
    StreakResult,
    Settings,
    Note,
    NotesFile,
    Task,
    TasksFile,
    Habit,
    HabitCompletion,
    HabitsFile,
    HabitWithStreak,
    FocusSession,
    FocusState,
    WeeklyReflection,
    ReflectionsFile,
)
