"""Life OS core library: markdown review codec, life map and aggregation.

Public API re-exports for convenient imports:
    from lifeos import parse_daily_review, update_life_map_file, ...
"""

# Workspace & paths
from lifeos.workspace import (
    workspace_root,
    load_settings,
    get_user_timezone,
    aggregation_window_days,
    today_str,
    now_local,
    settings_path,
    daily_reviews_dir,
    weekly_reviews_dir,
    life_map_path,
)

# File I/O
from lifeos.fileio import (
    read_text,
    read_yaml,
    write_text_atomic,
)

# Text primitives
from lifeos.markdown import (
    scan,
    is_placeholder,
    is_blank,
    clean_value,
    extract_section,
    extract_blockquote,
    text_after_prompt,
)

# Checkbox parsing
from lifeos.checkbox import (
    extract_checkboxes,
    checked_option,
)

# Review codecs
from lifeos.daily_review import (
    parse_daily_review,
    serialize_daily_review,
)
from lifeos.weekly_review import (
    parse_weekly_review,
    serialize_weekly_review,
)

# Life map
from lifeos.life_map import (
    parse_life_map,
    serialize_life_map,
    serialize_life_map_rows,
    find_table_bounds,
    update_life_map_file,
    get_life_map_chart_data,
)

# Aggregation
from lifeos.aggregation import (
    aggregate_domain_scores,
    derive_domains_from_energy,
    combine_aggregated_with_derived,
    is_data_empty,
    should_show_empty_state,
    get_energy_trend_data,
    convert_to_chart_data,
)

# Dates
from lifeos.dates import (
    parse_iso_date,
    format_date_for_form,
    format_display_date,
    compare_dates,
    is_today,
    week_start,
    iso_week_number,
)

# Store
from lifeos.store import (
    validate_daily_review,
    validate_weekly_review,
    validate_life_map_update,
    clamp_score,
    load_daily_review,
    load_daily_reviews,
    create_daily_review,
    update_daily_review,
    load_weekly_review,
    load_weekly_reviews,
    create_weekly_review,
    update_weekly_review,
    list_reviews,
    load_life_map,
    update_life_map,
    dashboard_snapshot,
)

# Models
from lifeos.models import (
    DOMAIN_KEYS,
    FRICTION_ACTIONS,
    DailyReview,
    WeeklyReview,
    LifeMapDomain,
    LifeMap,
    ChartDataItem,
    EnergyTrendItem,
)
