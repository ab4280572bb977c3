def normalize_search_result(result):
    return {
        "title": result.title,
        "snippet": result.snippet,
        "slug": result.slug,
    }
