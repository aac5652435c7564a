"""Services package - import from subdirectories directly.

Subpackages:
- config: Backend settings and panel state persistence
- fetch: Spawn-and-poll HTTP primitive
- scores: Leaderboard data types and the filter/sort pipeline
- sync: Refetch detection, token refresh and the scoreboard controller
"""
