"""Seed the database with demo users, a website and one piece of content."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storyslip.database import SessionLocal, engine, Base
import storyslip.models  # noqa: F401

from storyslip.models.user import User
from storyslip.models.website import Website, WebsiteMember
from storyslip.models.content import Content
from storyslip.models.content_version import ContentVersion


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            User(email="admin@storyslip.dev", name="Platform Admin", role="admin"),
            User(email="owner@storyslip.dev", name="Site Owner", role="user"),
            User(email="editor@storyslip.dev", name="Staff Editor", role="user"),
            User(email="viewer@storyslip.dev", name="Read Only", role="user"),
        ]
        db.add_all(users)
        db.flush()
        admin, owner, editor, viewer = users

        website = Website(name="Demo Blog", domain="blog.example.com", owner_id=owner.user_id)
        db.add(website)
        db.flush()
        db.add_all([
            WebsiteMember(website_id=website.website_id, user_id=owner.user_id, role="owner"),
            WebsiteMember(website_id=website.website_id, user_id=editor.user_id, role="editor"),
            WebsiteMember(website_id=website.website_id, user_id=viewer.user_id, role="viewer"),
        ])

        content = Content(
            website_id=website.website_id,
            title="Welcome to StorySlip",
            body="This post was created by the seed script.",
            excerpt="A first post",
            status="published",
            version_number=1,
            author_id=owner.user_id,
        )
        db.add(content)
        db.flush()
        db.add(ContentVersion(
            content_id=content.content_id,
            version_number=1,
            title=content.title,
            body=content.body,
            excerpt=content.excerpt,
            change_type="create",
            author_id=owner.user_id,
        ))
        db.commit()

        print("Seed complete:")
        for u in users:
            print(f"  {u.role:6} {u.email}")
        print(f"  website {website.website_id}")
        print(f"  content {content.content_id}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
