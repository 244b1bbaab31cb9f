import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from storyslip.database import Base, get_db
from storyslip.main import app
from storyslip.models.user import User
from storyslip.models.website import Website, WebsiteMember
from storyslip.models.content import Content
from storyslip.models.content_version import ContentVersion

TEST_DB_URL = "sqlite:///./test_storyslip.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(email="admin@storyslip.dev", name="Admin", role="admin"),
        "owner": User(email="owner@storyslip.dev", name="Owner", role="user"),
        "editor": User(email="editor@storyslip.dev", name="Editor", role="user"),
        "writer": User(email="writer@storyslip.dev", name="Writer", role="user"),
        "viewer": User(email="viewer@storyslip.dev", name="Viewer", role="user"),
        "outsider": User(email="outsider@storyslip.dev", name="Outsider", role="user"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_website(db, seed_users):
    website = Website(name="Demo Blog", domain="blog.example.com", owner_id=seed_users["owner"].user_id)
    db.add(website)
    db.flush()
    for key, role in (("owner", "owner"), ("editor", "editor"), ("writer", "editor"), ("viewer", "viewer")):
        db.add(WebsiteMember(website_id=website.website_id, user_id=seed_users[key].user_id, role=role))
    db.commit()
    db.refresh(website)
    return website


def make_content(db, website, author, versions: int = 1, title: str = "Post") -> Content:
    """Insert a content row with `versions` recorded versions (v1..vN)."""
    content = Content(
        website_id=website.website_id,
        title=f"{title} v{versions}",
        body=f"Body v{versions}",
        excerpt=f"Excerpt v{versions}",
        status="draft",
        version_number=versions,
        author_id=author.user_id,
    )
    db.add(content)
    db.flush()
    for n in range(1, versions + 1):
        db.add(ContentVersion(
            content_id=content.content_id,
            version_number=n,
            title=f"{title} v{n}",
            body=f"Body v{n}",
            excerpt=f"Excerpt v{n}",
            change_type="create" if n == 1 else "update",
            author_id=author.user_id,
        ))
    db.commit()
    db.refresh(content)
    return content


@pytest.fixture
def seed_content(db, seed_website, seed_users):
    return make_content(db, seed_website, seed_users["owner"], versions=3)


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
