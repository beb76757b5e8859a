"""initial schema: accounts, profiles, posts, tags, reactions, follows

Revision ID: 0001
Revises:
Create Date: 2026-03-02 00:00:00

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
        comment="创建时间 (UTC)",
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
        comment="更新时间 (UTC)",
    )


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), nullable=False, comment="主键 (UUID v7)"),
        sa.Column("email", sa.String(255), nullable=False, comment="登录邮箱"),
        sa.Column("hashed_password", sa.String(255), nullable=False, comment="密码哈希值"),
        sa.Column(
            "is_active",
            sa.Boolean(),
            server_default=sa.text("true"),
            nullable=False,
            comment="是否激活",
        ),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint("length(trim(email)) > 0", name=op.f("ck_accounts_email_not_empty")),
        sa.CheckConstraint(
            "length(hashed_password) > 0", name=op.f("ck_accounts_password_not_empty")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_accounts")),
        sa.UniqueConstraint("email", name=op.f("uq_accounts_email")),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False, comment="主键 (UUID v7)"),
        sa.Column("account_id", sa.Uuid(), nullable=False, comment="关联账号ID"),
        sa.Column("username", sa.String(20), nullable=False, comment="用户名"),
        sa.Column("display_name", sa.String(50), nullable=False, comment="显示名"),
        sa.Column("avatar_url", sa.String(512), nullable=True, comment="头像URL"),
        sa.Column(
            "bio", sa.String(150), server_default=sa.text("''"), nullable=False, comment="一言简介"
        ),
        sa.Column(
            "is_admin",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
            comment="是否管理员",
        ),
        sa.Column(
            "is_verified",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
            comment="是否认证账号",
        ),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "length(trim(display_name)) > 0", name=op.f("ck_profiles_display_name_not_empty")
        ),
        sa.CheckConstraint("length(bio) <= 150", name=op.f("ck_profiles_bio_length")),
        sa.ForeignKeyConstraint(
            ["account_id"], ["accounts.id"], name=op.f("fk_profiles_account_id_accounts")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_profiles")),
        sa.UniqueConstraint("account_id", name=op.f("uq_profiles_account_id")),
        sa.UniqueConstraint("username", name=op.f("uq_profiles_username")),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Uuid(), nullable=False, comment="主键 (UUID v7)"),
        sa.Column("name", sa.String(50), nullable=False, comment="标签名"),
        _created_at(),
        sa.CheckConstraint("length(name) > 0", name=op.f("ck_tags_name_not_empty")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_tags")),
        sa.UniqueConstraint("name", name=op.f("uq_tags_name")),
    )

    op.create_table(
        "reactions",
        sa.Column("id", sa.Uuid(), nullable=False, comment="主键 (UUID v7)"),
        sa.Column("name", sa.String(50), nullable=False, comment="反应名称"),
        sa.Column("emoji", sa.String(16), nullable=False, comment="表情"),
        sa.Column(
            "sort_order",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
            comment="排序 (升序)",
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_reactions")),
        sa.UniqueConstraint("name", name=op.f("uq_reactions_name")),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), nullable=False, comment="主键 (UUID v7)"),
        sa.Column("author_id", sa.Uuid(), nullable=False, comment="作者账号ID"),
        sa.Column("image_url", sa.String(512), nullable=False, comment="投稿图片URL"),
        sa.Column("title", sa.String(100), nullable=False, comment="标题"),
        sa.Column(
            "description", sa.Text(), server_default=sa.text("''"), nullable=False, comment="说明"
        ),
        sa.Column("region", sa.String(10), nullable=True, comment="地域"),
        sa.Column("url", sa.String(2048), nullable=True, comment="相关链接 (http/https)"),
        sa.Column(
            "edited_at", sa.DateTime(timezone=True), nullable=True, comment="最后编辑时间 (UTC)"
        ),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint("length(trim(title)) > 0", name=op.f("ck_posts_title_not_empty")),
        sa.CheckConstraint(
            "length(image_url) > 0", name=op.f("ck_posts_image_url_not_empty")
        ),
        sa.ForeignKeyConstraint(
            ["author_id"], ["accounts.id"], name=op.f("fk_posts_author_id_accounts")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_posts")),
    )
    op.create_index("ix_posts_author_created", "posts", ["author_id", "created_at"])
    op.create_index(op.f("ix_posts_posts_region"), "posts", ["region"])

    op.create_table(
        "post_tags",
        sa.Column("post_id", sa.Uuid(), nullable=False, comment="投稿ID"),
        sa.Column("tag_id", sa.Uuid(), nullable=False, comment="标签ID"),
        sa.Column(
            "position",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
            comment="提交时的顺序 (从 0 开始)",
        ),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["post_id"],
            ["posts.id"],
            name=op.f("fk_post_tags_post_id_posts"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], name=op.f("fk_post_tags_tag_id_tags")),
        sa.PrimaryKeyConstraint("post_id", "tag_id", name=op.f("pk_post_tags")),
    )
    op.create_index(op.f("ix_post_tags_post_tags_tag_id"), "post_tags", ["tag_id"])

    op.create_table(
        "post_reactions",
        sa.Column("post_id", sa.Uuid(), nullable=False, comment="投稿ID"),
        sa.Column("user_id", sa.Uuid(), nullable=False, comment="反应者账号ID"),
        sa.Column("reaction_id", sa.Uuid(), nullable=False, comment="反应ID"),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["post_id"],
            ["posts.id"],
            name=op.f("fk_post_reactions_post_id_posts"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["accounts.id"], name=op.f("fk_post_reactions_user_id_accounts")
        ),
        sa.ForeignKeyConstraint(
            ["reaction_id"],
            ["reactions.id"],
            name=op.f("fk_post_reactions_reaction_id_reactions"),
        ),
        sa.PrimaryKeyConstraint(
            "post_id", "user_id", "reaction_id", name=op.f("pk_post_reactions")
        ),
    )

    op.create_table(
        "follows",
        sa.Column("follower_id", sa.Uuid(), nullable=False, comment="关注者账号ID"),
        sa.Column("following_id", sa.Uuid(), nullable=False, comment="被关注者账号ID"),
        _created_at(),
        sa.CheckConstraint(
            "follower_id <> following_id", name=op.f("ck_follows_no_self_follow")
        ),
        sa.ForeignKeyConstraint(
            ["follower_id"], ["accounts.id"], name=op.f("fk_follows_follower_id_accounts")
        ),
        sa.ForeignKeyConstraint(
            ["following_id"], ["accounts.id"], name=op.f("fk_follows_following_id_accounts")
        ),
        sa.PrimaryKeyConstraint("follower_id", "following_id", name=op.f("pk_follows")),
    )
    op.create_index(op.f("ix_follows_follows_following_id"), "follows", ["following_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_follows_follows_following_id"), table_name="follows")
    op.drop_table("follows")
    op.drop_table("post_reactions")
    op.drop_index(op.f("ix_post_tags_post_tags_tag_id"), table_name="post_tags")
    op.drop_table("post_tags")
    op.drop_index(op.f("ix_posts_posts_region"), table_name="posts")
    op.drop_index("ix_posts_author_created", table_name="posts")
    op.drop_table("posts")
    op.drop_table("reactions")
    op.drop_table("tags")
    op.drop_table("profiles")
    op.drop_table("accounts")
