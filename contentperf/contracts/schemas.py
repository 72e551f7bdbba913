from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from contentperf.domain.models import (
    ActionResult,
    ActionResultLog,
    MetricsSummary,
    PerformanceRecord,
)
from contentperf.domain.states import ActionStatus, Bucket


BucketName = Literal["A", "B", "C", "D", "F"]
StatusName = Literal["generated", "draft", "flagged", "skipped", "error"]


class MetricsSummaryContract(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pageviews: int = Field(ge=0)
    entrances: int = Field(ge=0)
    avg_engagement: int = Field(ge=0, alias="avgEngagement")
    has_conversions: bool = Field(alias="hasConversions")


class PerformanceRecordContract(BaseModel):
    slug: str = Field(min_length=1)
    content_role: str
    bucket: BucketName
    actions: list[str] = Field(default_factory=list)
    metrics: MetricsSummaryContract
    analyzed_at: str

    @classmethod
    def from_record(cls, record: PerformanceRecord) -> "PerformanceRecordContract":
        return cls(
            slug=record.slug,
            content_role=record.content_role,
            bucket=record.bucket.value,
            actions=list(record.actions),
            metrics=MetricsSummaryContract(
                pageviews=record.metrics.pageviews,
                entrances=record.metrics.entrances,
                avg_engagement=record.metrics.avg_engagement,
                has_conversions=record.metrics.has_conversions,
            ),
            analyzed_at=record.analyzed_at,
        )

    def to_record(self) -> PerformanceRecord:
        return PerformanceRecord(
            slug=self.slug,
            content_role=self.content_role,
            bucket=Bucket(self.bucket),
            actions=tuple(self.actions),
            metrics=MetricsSummary(
                pageviews=self.metrics.pageviews,
                entrances=self.metrics.entrances,
                avg_engagement=self.metrics.avg_engagement,
                has_conversions=self.metrics.has_conversions,
            ),
            analyzed_at=self.analyzed_at,
        )


class BucketSummary(BaseModel):
    A: int = 0
    B: int = 0
    C: int = 0
    D: int = 0
    F: int = 0
    unchanged: int = 0


class PerformanceSnapshot(BaseModel):
    generated_at: str
    period: str = "28_days"
    summary: BucketSummary = Field(default_factory=BucketSummary)
    pages: list[PerformanceRecordContract] = Field(default_factory=list)


class ActionResultContract(BaseModel):
    status: StatusName
    slug: str
    action: str
    message: str
    output: str | None = None

    @classmethod
    def from_result(cls, result: ActionResult) -> "ActionResultContract":
        return cls(**result.to_dict())

    def to_result(self) -> ActionResult:
        return ActionResult(
            status=ActionStatus(self.status),
            slug=self.slug,
            action=self.action,
            message=self.message,
            output=self.output,
        )


class ActionResultBuckets(BaseModel):
    applied: list[ActionResultContract] = Field(default_factory=list)
    generated: list[ActionResultContract] = Field(default_factory=list)
    draft: list[ActionResultContract] = Field(default_factory=list)
    flagged: list[ActionResultContract] = Field(default_factory=list)
    skipped: list[ActionResultContract] = Field(default_factory=list)
    errors: list[ActionResultContract] = Field(default_factory=list)


class ActionResultsDocument(BaseModel):
    executed_at: str
    results: ActionResultBuckets = Field(default_factory=ActionResultBuckets)

    @classmethod
    def from_log(cls, log: ActionResultLog) -> "ActionResultsDocument":
        def convert(items: list[ActionResult]) -> list[ActionResultContract]:
            return [ActionResultContract.from_result(r) for r in items]

        return cls(
            executed_at=log.executed_at,
            results=ActionResultBuckets(
                applied=convert(log.applied),
                generated=convert(log.generated),
                draft=convert(log.draft),
                flagged=convert(log.flagged),
                skipped=convert(log.skipped),
                errors=convert(log.errors),
            ),
        )
