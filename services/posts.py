import html
import logging
from typing import List, Optional

import bleach

from exceptions import AlreadyLiked, CommentNotFound, NotFound, NotLiked, Unauthorized, ValidationError
from models.post import Comment, Like, Post
from services.firestore import FirestoreDB
from services.validation import validate_post_input

logger = logging.getLogger(__name__)


def clean_text(text: Optional[str]) -> str:
    """Strip any markup from user-supplied text, leaving plain characters as sent"""
    if text is None:
        return ""
    return html.unescape(bleach.clean(text, tags=set(), strip=True))


class PostService:
    """
    Owns every mutation of a post: creation, owner-only deletion, like/unlike
    and comment add/remove. Likes and comments are kept newest-first.
    """

    def __init__(self, db: FirestoreDB):
        self.db = db

    def _validated_text(self, text: Optional[str]) -> str:
        # limits apply to what the caller sent; the cleaned text must still be non-empty
        cleaned = clean_text(text)
        for candidate in (text, cleaned):
            errors, is_valid = validate_post_input({"text": candidate})
            if not is_valid:
                raise ValidationError(errors)
        return cleaned

    def create_post(self, user_id: str, text: Optional[str], name: Optional[str] = None,
                    avatar: Optional[str] = None) -> Post:
        """Create a post owned by user_id with no likes or comments"""
        post = Post(user=user_id, text=self._validated_text(text), name=name, avatar=avatar)
        post = self.db.create_post(post)
        logger.info("Post %s created by %s", post.id, user_id)
        return post

    def get_posts(self) -> List[Post]:
        """All posts, newest first. An empty store yields an empty list."""
        return self.db.get_all_posts()

    def get_post(self, post_id: str) -> Post:
        post = self.db.get_post(post_id)
        if post is None:
            raise NotFound("post", post_id)
        return post

    def delete_post(self, user_id: str, post_id: str):
        """Delete a post; only its owner may do so"""
        post = self.get_post(post_id)
        if post.user != user_id:
            logger.warning("User %s tried to delete post %s owned by %s", user_id, post_id, post.user)
            raise Unauthorized()
        self.db.delete_post(post_id)
        logger.info("Post %s deleted by %s", post_id, user_id)

    def _update(self, post_id: str, mutate) -> Post:
        post = self.db.update_post(post_id, mutate)
        if post is None:
            raise NotFound("post", post_id)
        return post

    def like_post(self, user_id: str, post_id: str) -> Post:
        def add_like(post: Post) -> Post:
            if post.has_liked(user_id):
                raise AlreadyLiked()
            post.likes.insert(0, Like(user=user_id))
            return post

        post = self._update(post_id, add_like)
        logger.info("Post %s liked by %s", post_id, user_id)
        return post

    def unlike_post(self, user_id: str, post_id: str) -> Post:
        def remove_like(post: Post) -> Post:
            if not post.has_liked(user_id):
                raise NotLiked()
            index = next(i for i, like in enumerate(post.likes) if like.user == user_id)
            del post.likes[index]
            return post

        post = self._update(post_id, remove_like)
        logger.info("Post %s unliked by %s", post_id, user_id)
        return post

    def add_comment(self, user_id: str, post_id: str, text: Optional[str], name: Optional[str] = None,
                    avatar: Optional[str] = None) -> Post:
        text = self._validated_text(text)

        def push_comment(post: Post) -> Post:
            post.comments.insert(0, Comment(user=user_id, text=text, name=name, avatar=avatar))
            return post

        post = self._update(post_id, push_comment)
        logger.info("Comment %s added to post %s by %s", post.comments[0].id, post_id, user_id)
        return post

    def remove_comment(self, user_id: str, post_id: str, comment_id: str) -> Post:
        """
        Remove a comment from a post.

        Any authenticated user may remove any comment; the comment's author is
        not compared with user_id.
        """
        def pull_comment(post: Post) -> Post:
            comment = post.find_comment(comment_id)
            if comment is None:
                raise CommentNotFound(comment_id)
            post.comments.remove(comment)
            return post

        post = self._update(post_id, pull_comment)
        logger.info("Comment %s removed from post %s by %s", comment_id, post_id, user_id)
        return post
