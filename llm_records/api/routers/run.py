"""
Prompt run endpoint: LLM call, guards, and record replacement.
"""

from fastapi import APIRouter

from llm_records.api.dependencies import RunPromptUseCaseDep
from llm_records.api.schemas import PromptOut, RecordOut, RunMeta, RunRequest, RunResponse

router = APIRouter(tags=["run"])


@router.post("/run", response_model=RunResponse)
async def run_prompt(payload: RunRequest, use_case: RunPromptUseCaseDep) -> RunResponse:
    """
    Send the prompt to the LLM and replace all records with its answer.

    Returns the stored prompt, the new records, and any guard warnings
    (dropped records, truncated fields).
    """
    result = await use_case.execute(payload.prompt)
    return RunResponse(
        prompt=PromptOut.model_validate(result.prompt),
        records=[RecordOut.model_validate(r) for r in result.records],
        meta=RunMeta(warnings=result.warnings),
    )
