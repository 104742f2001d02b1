#!/usr/bin/env python3
"""
MailCleanup - Find bulk and automated Gmail mail worth deleting

A Python library that composes Gmail search queries for common classes of
bulk mail, estimates how many messages each one matches, and turns the
results into step-by-step manual cleanup instructions. It never deletes mail
itself.

Main Components:
- Categories: The fixed catalog of cleanup rules
- Composer: Category selection + age threshold -> Gmail queries
- EstimateClient: Per-query counts with fault isolation
- AnalysisAggregator: Sequential estimation into an AnalysisSnapshot
- Action log: Paced manual-action records from a snapshot
- Export: JSON document of queries and instructions
- CleanupSession: Ties it all together

Usage:
    from mailcleanup import CleanupSession, GmailClient

    session = CleanupSession(GmailClient("credentials.json"))
    session.refresh_profile()
    session.select("promotions", "noreply")
    session.set_time_range(90)

    snapshot = session.run_analysis()
    for record in session.show_instructions():
        print(record.category_name, record.full_query)

    session.save_export(".")
"""

from .categories import (
    ALL_TIME,
    CLEANUP_CATEGORIES,
    DEFAULT_TIME_RANGE,
    TIME_RANGE_OPTIONS,
    Category,
    RiskLevel,
    category_ids,
    get_category,
    time_range_label,
    validate_time_range,
)
from .composer import ComposedQuery, age_filter, compose
from .estimate import EstimateClient
from .snapshot import AnalysisSnapshot, QueryResult, estimate_space_mb, format_space_mb
from .reducers import Reducer, RiskTally, SnapshotReducer
from .analysis import AnalysisAggregator, AnalysisState, StaleRunError
from .action_log import ManualActionRecord, build_log, instructions_for
from .export import EXPORT_INSTRUCTIONS, build_export, export_filename, export_json, save_export
from .config import CleanupConfig, load_config
from .session import PROFILE_UNAVAILABLE, AnalysisInProgressError, CleanupSession, SelectionState
from .dummy_client import DummyClient
from .gmail_client import GmailClient

__all__ = [
    # Catalog
    'ALL_TIME',
    'CLEANUP_CATEGORIES',
    'DEFAULT_TIME_RANGE',
    'TIME_RANGE_OPTIONS',
    'Category',
    'RiskLevel',
    'category_ids',
    'get_category',
    'time_range_label',
    'validate_time_range',

    # Composition
    'ComposedQuery',
    'age_filter',
    'compose',

    # Analysis
    'EstimateClient',
    'AnalysisAggregator',
    'AnalysisState',
    'AnalysisSnapshot',
    'QueryResult',
    'StaleRunError',
    'estimate_space_mb',
    'format_space_mb',

    # Reducers
    'Reducer',
    'RiskTally',
    'SnapshotReducer',

    # Manual actions and export
    'ManualActionRecord',
    'build_log',
    'instructions_for',
    'EXPORT_INSTRUCTIONS',
    'build_export',
    'export_filename',
    'export_json',
    'save_export',

    # Session and configuration
    'CleanupConfig',
    'load_config',
    'CleanupSession',
    'SelectionState',
    'AnalysisInProgressError',
    'PROFILE_UNAVAILABLE',

    # Email clients
    'GmailClient',
    'DummyClient',
]
