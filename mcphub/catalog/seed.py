"""Seed records loaded into a fresh store."""

from datetime import datetime, timezone
from typing import List

from .schemas import BlogPost, DocumentationSection, Tool


def _date(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def seed_tools() -> List[Tool]:
    return [
        Tool(
            id="1",
            name="GitHub Repository Analyzer",
            description="Analyze GitHub repositories for code quality, security issues, and documentation completeness",
            category="Development",
            tags=["github", "analysis", "code-quality"],
            version="1.2.0",
            author="Smithery Team",
            repository="https://github.com/smithery-ai/github-analyzer",
            documentation="https://docs.smithery.ai/tools/github-analyzer",
            install_command="npm install @smithery/github-analyzer",
            usage_examples=[
                "smithery github-analyzer --repo owner/repo-name",
                "smithery github-analyzer --url https://github.com/owner/repo",
            ],
            created_at=_date(2024, 1, 15),
            updated_at=_date(2024, 1, 20),
            downloads=1250,
            rating=4.8,
        ),
        Tool(
            id="2",
            name="AI Code Reviewer",
            description="Automated code review using AI to detect bugs, suggest improvements, and enforce coding standards",
            category="AI",
            tags=["ai", "code-review", "automation"],
            version="2.1.3",
            author="Smithery Team",
            repository="https://github.com/smithery-ai/ai-reviewer",
            documentation="https://docs.smithery.ai/tools/ai-reviewer",
            install_command="npm install @smithery/ai-reviewer",
            usage_examples=[
                "smithery ai-review --file src/app.js",
                "smithery ai-review --directory src/",
            ],
            created_at=_date(2024, 1, 10),
            updated_at=_date(2024, 1, 25),
            downloads=2100,
            rating=4.9,
        ),
        Tool(
            id="3",
            name="API Documentation Generator",
            description="Generate comprehensive API documentation from code comments and endpoint definitions",
            category="Documentation",
            tags=["api", "documentation", "openapi"],
            version="1.0.5",
            author="Smithery Team",
            repository="https://github.com/smithery-ai/api-docs-gen",
            documentation="https://docs.smithery.ai/tools/api-docs-gen",
            install_command="npm install @smithery/api-docs-gen",
            usage_examples=[
                "smithery api-docs --input src/routes --output docs/",
                "smithery api-docs --format openapi --version 3.0",
            ],
            created_at=_date(2024, 1, 5),
            updated_at=_date(2024, 1, 18),
            downloads=850,
            rating=4.6,
        ),
    ]


def seed_blog_posts() -> List[BlogPost]:
    return [
        BlogPost(
            id="1",
            title="Getting Started with MCP Tools",
            content=(
                "# Getting Started with MCP Tools\n\n"
                "Model Context Protocol (MCP) tools provide a standardized way to extend "
                "AI capabilities by connecting them to external data sources, APIs, and services.\n\n"
                "## Getting Started\n\n"
                "1. Browse our tool catalog\n"
                "2. Install the tools you need\n"
                "3. Configure your AI workflows\n"
            ),
            excerpt=(
                "Learn how to get started with Model Context Protocol (MCP) tools and enhance "
                "your AI workflows with real-time data and external integrations."
            ),
            author="Sarah Chen",
            tags=["mcp", "tutorial", "getting-started"],
            featured_image="https://images.unsplash.com/photo-1555949963-aa79dcee981c?w=800",
            published=True,
            created_at=_date(2024, 1, 20),
            updated_at=_date(2024, 1, 20),
            slug="getting-started-with-mcp-tools",
        ),
        BlogPost(
            id="2",
            title="Building Custom AI Tools: A Developer's Guide",
            content=(
                "# Building Custom AI Tools\n\n"
                "Creating custom AI tools lets you tailor AI capabilities to your needs. "
                "Define the tool interface, implement the handler, then publish it to the catalog.\n"
            ),
            excerpt=(
                "A comprehensive guide for developers who want to create custom AI tools and "
                "integrate them with the MCP ecosystem."
            ),
            author="Alex Rodriguez",
            tags=["development", "custom-tools", "tutorial"],
            featured_image="https://images.unsplash.com/photo-1461749280684-dccba630e2f6?w=800",
            published=True,
            created_at=_date(2024, 1, 15),
            updated_at=_date(2024, 1, 16),
            slug="building-custom-ai-tools-guide",
        ),
        BlogPost(
            id="3",
            title="The Future of AI Tool Integration",
            content=(
                "# The Future of AI Tool Integration\n\n"
                "From multi-modal capabilities to edge computing, tool integration is moving "
                "towards richer, faster and more autonomous workflows.\n"
            ),
            excerpt=(
                "Explore the emerging trends and future possibilities in AI tool integration, "
                "from multi-modal capabilities to edge computing."
            ),
            author="Dr. Emily Watson",
            tags=["future", "ai-integration", "trends"],
            featured_image="https://images.unsplash.com/photo-1518709268805-4e9042af2176?w=800",
            published=True,
            created_at=_date(2024, 1, 10),
            updated_at=_date(2024, 1, 12),
            slug="future-of-ai-tool-integration",
        ),
    ]


def seed_documentation() -> List[DocumentationSection]:
    return [
        DocumentationSection(
            id="1",
            title="Quick Start Guide",
            content=(
                "# Quick Start Guide\n\n"
                "Install the CLI with `npm install -g @smithery/cli`, then run "
                "`smithery install github-analyzer` to add your first tool.\n"
            ),
            category="Getting Started",
            order=1,
            last_updated=_date(2024, 1, 20),
        ),
        DocumentationSection(
            id="2",
            title="API Reference",
            content=(
                "# API Reference\n\n"
                "All endpoints live under `/api` and answer with "
                "`{success, data, error, meta}` envelopes.\n"
            ),
            category="API",
            order=2,
            last_updated=_date(2024, 1, 18),
        ),
        DocumentationSection(
            id="3",
            title="Tool Development Guide",
            content=(
                "# Tool Development Guide\n\n"
                "Describe your tool's inputs, implement its handler and register it "
                "with an MCP server.\n"
            ),
            category="Development",
            order=3,
            last_updated=_date(2024, 1, 15),
        ),
        DocumentationSection(
            id="4",
            title="FAQ",
            content=(
                "# Frequently Asked Questions\n\n"
                "### What is Smithery.ai?\n\n"
                "A platform for building, sharing, and deploying AI tools.\n"
            ),
            category="Support",
            order=4,
            last_updated=_date(2024, 1, 22),
        ),
    ]
