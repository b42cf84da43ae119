"""
Cost Calculator

Pricing and duration estimates for the dubbing pipeline.
"""

import math

from constants import DubbingPricing, PipelineDefaults, TimeEstimates
from dtos.internal import PipelineConfig
from dtos.response import CostBreakdown, CostEstimate, TimeBreakdown, TimeEstimate


def chunk_count(video_duration: float, chunk_duration: int) -> int:
    return math.ceil(video_duration / chunk_duration)


class CostCalculator:
    """Estimates provider cost and processing time for a job"""

    def calculate_cost(self, video_duration: float, config: PipelineConfig) -> CostEstimate:
        """
        Estimate the dubbing cost in USD.

        Dubbing is billed per minute of audio (halved when a watermark is
        accepted) plus a flat processing fee per chunk.
        """
        chunks = chunk_count(video_duration, config.chunk_duration)

        dubbing_cost = video_duration / 60 * DubbingPricing.PER_MINUTE
        if config.use_watermark:
            dubbing_cost *= 1 - DubbingPricing.WATERMARK_DISCOUNT
        processing_cost = DubbingPricing.PROCESSING_PER_CHUNK * chunks
        total_cost = dubbing_cost + processing_cost

        return CostEstimate(
            total_cost=round(total_cost, 2),
            cost_per_chunk=round(total_cost / chunks, 2) if chunks else 0.0,
            total_chunks=chunks,
            video_duration=video_duration,
            breakdown=CostBreakdown(
                dubbing_cost=round(dubbing_cost, 2),
                processing_cost=round(processing_cost, 2),
            ),
        )

    def calculate_time(self, video_duration: float, config: PipelineConfig) -> TimeEstimate:
        """
        Estimate wall-clock seconds per stage.

        Dubbing runs ``max_parallel_jobs`` chunks at a time, so its estimate
        grows with the number of batches rather than the number of chunks.
        """
        minutes = video_duration / 60
        chunks = chunk_count(video_duration, config.chunk_duration)
        batches = math.ceil(chunks / config.max_parallel_jobs)

        download = minutes * TimeEstimates.DOWNLOAD_PER_MINUTE
        chunking = minutes * TimeEstimates.CHUNKING_PER_MINUTE
        dubbing = batches * config.chunk_duration * TimeEstimates.DUBBING_MULTIPLIER
        merging = minutes * TimeEstimates.MERGING_PER_MINUTE
        finalization = TimeEstimates.FINALIZATION

        return TimeEstimate(
            total_time=math.ceil(download + chunking + dubbing + merging + finalization),
            breakdown=TimeBreakdown(
                download=math.ceil(download),
                chunking=math.ceil(chunking),
                dubbing=math.ceil(dubbing),
                merging=math.ceil(merging),
                finalization=finalization,
            ),
        )

    @staticmethod
    def calculate_optimal_chunk_duration(video_duration: float) -> int:
        """Suggested chunk length; always one of the accepted chunk durations"""
        _, short, medium, long = PipelineDefaults.ALLOWED_CHUNK_DURATIONS
        if video_duration < 300:
            return short
        if video_duration < 1800:
            return medium
        return long

    @staticmethod
    def format_cost(cost: float) -> str:
        return f"${cost:.2f}"

    @staticmethod
    def format_time(seconds: int) -> str:
        """Human readable duration, e.g. ``4m 10s`` or ``1h 5m``"""
        if seconds < 60:
            return f"{seconds}s"
        minutes, remaining_seconds = divmod(seconds, 60)
        if minutes < 60:
            return f"{minutes}m {remaining_seconds}s" if remaining_seconds else f"{minutes}m"
        hours, remaining_minutes = divmod(minutes, 60)
        return f"{hours}h {remaining_minutes}m" if remaining_minutes else f"{hours}h"
