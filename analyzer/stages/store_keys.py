from __future__ import annotations

"""analyzer.stages.store_keys

Central definitions for ArtifactStore keys.

Stages communicate by reading/writing intermediate results in an
:class:`~analyzer.framework.ArtifactStore`. Keeping the keys here means a
typo fails loudly at import time instead of silently producing an empty
section in the result.
"""


class StoreKeys:
    # classify_keys
    RESERVED_KEYS = "reserved_keys"
    JOB_KEYS = "job_keys"

    # declared_stages
    DECLARED_STAGES = "declared_stages"

    # stage_aggregation
    STAGE_AGGREGATION = "stage_aggregation"

    # keyword_scan
    KEYWORD_FLAGS = "keyword_flags"
