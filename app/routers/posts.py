# =============================================================================
# app/routers/posts.py - Post CRUD Endpoints
# =============================================================================
# Free-form posts with search and pagination.
# Mounted at /posts in main.py.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Query

from app.dependencies import PostServiceDep

router = APIRouter()

PostId = Annotated[str, Path(description="Post ObjectId (24 hex characters)")]
PostBody = Annotated[
    dict[str, Any] | None,
    Body(
        examples=[{"title": "Hello Mongo", "content": "First post", "author": "Budi"}],
    ),
]


@router.get("")
def list_posts(
    service: PostServiceDep,
    search: Annotated[str | None, Query(description="Matches title, content or author")] = None,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, description="Items per page")] = 10,
):
    """
    List posts, newest first.

    `search` is a case-insensitive substring match over title, content
    and author.
    """
    posts, pagination = service.list_posts(search=search, page=page, limit=limit)

    return {
        "success": True,
        "message": f"Found {len(posts)} posts",
        "data": posts,
        "pagination": pagination.model_dump(),
        "search_query": search or None,
    }


@router.get("/search/advanced")
def search_posts(
    service: PostServiceDep,
    title: Annotated[str | None, Query()] = None,
    author: Annotated[str | None, Query()] = None,
    content: Annotated[str | None, Query()] = None,
    date_from: Annotated[str | None, Query(description="ISO date, inclusive")] = None,
    date_to: Annotated[str | None, Query(description="ISO date, inclusive")] = None,
):
    """
    Search posts by several fields at once (at most 50 results).

    At least one parameter is required.
    """
    posts, query = service.search_posts(
        title=title,
        author=author,
        content=content,
        date_from=date_from,
        date_to=date_to,
    )

    return {
        "success": True,
        "message": f"Found {len(posts)} posts",
        "data": posts,
        "filters_applied": query.describe(),
    }


@router.get("/{post_id}")
def get_post(post_id: PostId, service: PostServiceDep):
    """Get a single post."""
    return {
        "success": True,
        "message": "Post found",
        "data": service.get_post(post_id),
    }


@router.post("", status_code=201)
def create_post(service: PostServiceDep, body: PostBody = None):
    """
    Create a post.

    Any JSON object is accepted; created_at and updated_at are set by
    the server.
    """
    return {
        "success": True,
        "message": "Post created successfully",
        "data": service.create_post(body),
    }


@router.put("/{post_id}")
def update_post(post_id: PostId, service: PostServiceDep, body: PostBody = None):
    """Merge the given fields into a post."""
    return {
        "success": True,
        "message": "Post updated successfully",
        "data": service.update_post(post_id, body),
    }


@router.delete("/{post_id}")
def delete_post(post_id: PostId, service: PostServiceDep):
    """Delete a post and return it."""
    return {
        "success": True,
        "message": "Post deleted successfully",
        "data": service.delete_post(post_id),
    }
