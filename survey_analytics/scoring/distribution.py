"""Distribution Builder: score-frequency tables for histogram display."""
from collections import Counter
from typing import Iterable, Union

import structlog

from survey_analytics.models.enums import DistributionOrder, ScaleType
from survey_analytics.models.survey import DistributionBucket, ResponseRecord
from survey_analytics.scoring.scale_policy import get_scale_policy

logger = structlog.get_logger(__name__)


class DistributionBuilder:
    """Count how often each score value was given on one scale.

    Parameters
    ----------
    order:
        Default bucket ordering. ``INSERTION`` keeps the order in which each
        score first appears; ``NUMERIC`` sorts ascending by score.
    """

    def __init__(self, order: DistributionOrder = DistributionOrder.INSERTION) -> None:
        self.order = DistributionOrder(order)

    def build(
        self,
        values: Iterable[object],
        scale: Union[ScaleType, str],
        order: DistributionOrder | None = None,
    ) -> list[DistributionBucket]:
        """One bucket per distinct valid score present in ``values``.

        Invalid values are skipped and scores with no occurrences never appear.
        """
        policy = get_scale_policy(scale)
        counts: Counter[int] = Counter()
        labels: dict[int, tuple[bool, str]] = {}
        skipped = 0
        for raw in values:
            result = policy.classify(raw)
            if result is None:
                skipped += 1
                continue
            counts[result.value] += 1
            labels.setdefault(result.value, (result.is_positive, result.label))

        scores = list(counts)  # Counter preserves first-insertion order
        if DistributionOrder(order or self.order) is DistributionOrder.NUMERIC:
            scores.sort()

        buckets = [
            DistributionBucket(
                score=score,
                count=counts[score],
                is_positive=labels[score][0],
                label=labels[score][1],
            )
            for score in scores
        ]
        logger.debug(
            "distribution_built",
            scale=policy.scale.value,
            buckets=len(buckets),
            skipped=skipped,
        )
        return buckets

    def build_by_scale(
        self,
        records: Iterable[ResponseRecord],
        order: DistributionOrder | None = None,
    ) -> dict[ScaleType, list[DistributionBucket]]:
        """Split response rows by their scale and build one distribution per scale present."""
        by_scale: dict[ScaleType, list[float]] = {}
        for record in records:
            by_scale.setdefault(record.scale, []).append(record.response)
        distributions = {
            scale: self.build(values, scale, order=order)
            for scale, values in by_scale.items()
        }
        return {scale: buckets for scale, buckets in distributions.items() if buckets}
