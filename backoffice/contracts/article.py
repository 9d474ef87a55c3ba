from typing import List, Optional

from pydantic import BaseModel

from backoffice.contracts.base import Contract, Endpoint
from backoffice.schemas import ErrorBody, GetResponse, ImageResponse, PageQuery, PostResponse


class ArticleForm(BaseModel):
    user_id: str
    nick_name: str
    title: str
    tags: Optional[List[str]] = None
    describe: Optional[str] = None
    image_url: ImageResponse
    content_html: str


class ArticleUpdate(ArticleForm):
    article_id: str


class Article(ArticleUpdate):
    created_at: str
    updated_at: str


class ArticleLookup(BaseModel):
    article_id: str


_post_responses = {200: PostResponse, 400: ErrorBody, 500: ErrorBody}

article_contract = Contract(
    "article",
    get_articles=Endpoint(
        "GET", "/admin/articles", query=PageQuery,
        responses={200: GetResponse[List[Article]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_article=Endpoint(
        "GET", "/admin/articles", query=ArticleLookup,
        responses={200: GetResponse[List[Article]], 400: ErrorBody, 500: ErrorBody},
    ),
    create_article=Endpoint("POST", "/admin/articles", body=ArticleForm, responses=_post_responses),
    update_article=Endpoint("PUT", "/admin/articles", body=ArticleUpdate, responses=_post_responses),
    delete_article=Endpoint("DELETE", "/admin/articles", body=ArticleLookup, responses=_post_responses),
)
