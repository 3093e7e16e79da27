from typing import List

from fastapi import APIRouter

from dependencies import CurrentUser, Posts
from models.post import DeleteResult, Post, PostInput

router = APIRouter()


@router.get("/test")
async def test_posts():
    return {"msg": "Posts Works"}


@router.get("", response_model=List[Post])
def get_posts(posts: Posts):
    """Get all posts, newest first"""
    return posts.get_posts()


@router.get("/{post_id}", response_model=Post)
def get_post(posts: Posts, post_id: str):
    return posts.get_post(post_id)


@router.post("", response_model=Post)
def create_post(posts: Posts, body: PostInput, current_user: CurrentUser):
    """Create a new post; name and avatar default to the caller's own"""
    return posts.create_post(
        current_user.id,
        body.text,
        name=body.name or current_user.name,
        avatar=body.avatar or current_user.avatar,
    )


@router.delete("/{post_id}", response_model=DeleteResult)
def delete_post(posts: Posts, post_id: str, current_user: CurrentUser):
    """Delete a post owned by the caller"""
    posts.delete_post(current_user.id, post_id)
    return DeleteResult(success=True)


@router.post("/like/{post_id}", response_model=Post)
def like_post(posts: Posts, post_id: str, current_user: CurrentUser):
    return posts.like_post(current_user.id, post_id)


@router.post("/unlike/{post_id}", response_model=Post)
def unlike_post(posts: Posts, post_id: str, current_user: CurrentUser):
    return posts.unlike_post(current_user.id, post_id)


@router.post("/comment/{post_id}", response_model=Post)
def add_comment(posts: Posts, post_id: str, body: PostInput, current_user: CurrentUser):
    """Add a comment to a post"""
    return posts.add_comment(
        current_user.id,
        post_id,
        body.text,
        name=body.name or current_user.name,
        avatar=body.avatar or current_user.avatar,
    )


@router.delete("/comment/{post_id}/{comment_id}", response_model=Post)
def remove_comment(posts: Posts, post_id: str, comment_id: str, current_user: CurrentUser):
    """Remove a comment from a post"""
    return posts.remove_comment(current_user.id, post_id, comment_id)
