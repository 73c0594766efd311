from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from llm_records.api.dependencies import UnitOfWorkDep
from llm_records.api.schemas import PromptOut, RecordOut
from llm_records.infra.config.dependencies import SettingsDep

router = APIRouter(tags=["ui"])

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "web" / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=select_autoescape(["html"])
)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(uow: UnitOfWorkDep, settings: SettingsDep) -> HTMLResponse:
    """Render the prompt box and record list with data read at request time."""
    async with uow:
        prompt = await uow.prompts.get_latest()
        records = await uow.records.list_all()
        context = {
            "app_name": settings.app_name,
            "prompt": PromptOut.model_validate(prompt) if prompt else None,
            "records": [RecordOut.model_validate(r) for r in records],
            "max_prompt_chars": settings.max_prompt_chars,
        }

    html = env.get_template("index.html").render(**context)
    return HTMLResponse(content=html)
