from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from summarizer.api.schemas import PromptOut, SummaryOut, UrlOut
from summarizer.db.session import get_db
from summarizer.services.repository import SummaryRepository

router = APIRouter(tags=["browse"])


def _summary_out(row) -> SummaryOut:
    prompt = row.prompt
    return SummaryOut(
        id=row.id,
        created_at=row.created_at,
        url_id=row.url_id,
        prompt_id=row.prompt_id,
        scraped_data=row.scraped_text,
        ai_response=row.model_output,
        prompt_name=prompt.name if prompt else None,
        prompt_description=prompt.description if prompt else None,
    )


@router.get("/urls", response_model=List[UrlOut])
def list_urls(db: Session = Depends(get_db)):
    return [UrlOut.model_validate(u) for u in SummaryRepository(db).list_urls()]


@router.get("/prompts", response_model=List[PromptOut])
def list_prompts(db: Session = Depends(get_db)):
    return [
        PromptOut(
            id=p.id,
            created_at=p.created_at,
            prompt_name=p.name,
            prompt=p.text,
            description=p.description,
        )
        for p in SummaryRepository(db).list_prompts()
    ]


@router.get("/summaries", response_model=List[SummaryOut])
def list_summaries(url_id: Optional[int] = None, db: Session = Depends(get_db)):
    return [_summary_out(row) for row in SummaryRepository(db).list_analyses(url_id=url_id)]
