"""
Interview process helpers.

Stages are stored in interview order. A stage without an explicit `order`
takes its position in the submitted list.
"""
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.interview_process import InterviewProcess
from careers.schemas.interview_process import InterviewStageDefinition


def order_stages(stages: List[InterviewStageDefinition]) -> List[dict]:
    documents = []
    for index, stage in enumerate(stages):
        document = stage.model_dump()
        if document["order"] is None:
            document["order"] = index
        documents.append(document)
    # sorted() is stable, so equal orders keep their submitted sequence
    return sorted(documents, key=lambda document: document["order"])


async def processes_for_role(db: AsyncSession, company_id: UUID, job_role_id: UUID) -> List[InterviewProcess]:
    result = await db.execute(
        select(InterviewProcess)
        .where(InterviewProcess.company_id == company_id, InterviewProcess.job_role_id == job_role_id)
        .order_by(InterviewProcess.created_at.desc())
    )
    return list(result.scalars().all())
