"""
File: app/api_router.py
Description: 根 API 路由聚合层

本模块负责：
1. 聚合所有业务领域的 Router
2. 统一设置路由前缀 (如 /auth, /posts)
3. 统一设置标签 (Tags) 用于 OpenAPI 文档分组

Author: jinmozhe
Created: 2025-12-05
Updated: 2026-03-02 (Okashi Map domains)
"""

from fastapi import APIRouter

from app.domains.auth.router import router as auth_router
from app.domains.feed.router import router as feed_router
from app.domains.follows.router import router as follows_router
from app.domains.posts.router import router as posts_router
from app.domains.profiles.router import router as profiles_router
from app.domains.reactions.router import router as reactions_router
from app.domains.signup.router import router as signup_router
from app.domains.tags.router import router as tags_router

# 创建根 API 路由
api_router = APIRouter()

# ------------------------------------------------------------------------------
# 注册领域路由
# ------------------------------------------------------------------------------

# 1. 认证与注册流程
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(signup_router, prefix="/signup", tags=["signup"])

# 2. 用户资料与关注关系
api_router.include_router(profiles_router, prefix="/profiles", tags=["profiles"])
api_router.include_router(follows_router, prefix="/follows", tags=["follows"])

# 3. 投稿、标签与反应
api_router.include_router(posts_router, prefix="/posts", tags=["posts"])
api_router.include_router(tags_router, prefix="/tags", tags=["tags"])
api_router.include_router(reactions_router, prefix="/reactions", tags=["reactions"])

# 4. 时间线
api_router.include_router(feed_router, prefix="/feed", tags=["feed"])
