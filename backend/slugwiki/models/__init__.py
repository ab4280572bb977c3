from .article import Article
from .article_revision import ArticleRevision, ArticleRevisionStub
from .search_index import SEARCH_INDEX_DDL, create_search_index

__all__ = [
    "Article",
    "ArticleRevision",
    "ArticleRevisionStub",
    "SEARCH_INDEX_DDL",
    "create_search_index",
]
