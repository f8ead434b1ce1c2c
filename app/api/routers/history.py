from fastapi import APIRouter, Query

from app.models.history import HistoryOut, RevisionOut
from app.services.crawl.spiders.wiki_history_spider import WikiHistorySpider

router = APIRouter(tags=["history"])


def get_spider() -> WikiHistorySpider:
    return WikiHistorySpider()


@router.get("/wiki/{slug}/history", response_model=HistoryOut)
def api_get_page_history(slug: str, first: int = Query(0, ge=0)):
    records = get_spider().crawl(slug, first)
    revisions = [RevisionOut(**r.to_dict()) for r in records]
    return HistoryOut(slug=slug, count=len(revisions), revisions=revisions)
