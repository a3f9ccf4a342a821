"""analyzer.framework.pipelines

Pipeline definitions (ordered stage lists).

To add a new analysis, implement a stage, register it, then drop its name
into a pipeline list. Stages that only read the document and the key
partition (stage_aggregation, keyword_scan) are independent of each other and
may appear in any order after classify_keys.

"""

from __future__ import annotations

from typing import Dict, List

PIPELINES: Dict[str, List[str]] = {
    # Full analysis used by analyzer.engine.analyze
    "gitlab_ci": [
        "classify_keys",
        "declared_stages",
        "stage_aggregation",
        "keyword_scan",
    ],
}

DEFAULT_PIPELINE = "gitlab_ci"
