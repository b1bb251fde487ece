"""
worldevents

Live world news aggregated from syndicated feeds.

Pipeline: select sources → fetch (concurrently) → normalize → deduplicate →
filter → sort (newest first) → limit.
"""

__version__ = "0.1.0"
