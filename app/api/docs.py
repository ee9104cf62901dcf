"""
Swagger UI with the gateway's custom stylesheet.
"""
from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse

from core.config import SwaggerSettings


def with_stylesheet(html: str, stylesheet_url: str) -> str:
    """Append a stylesheet link so it overrides the stock Swagger UI styles."""
    link = f'<link rel="stylesheet" type="text/css" href="{stylesheet_url}">'
    return html.replace("</head>", f"{link}\n</head>", 1)


def register_swagger_ui(app: FastAPI, swagger: SwaggerSettings) -> None:
    openapi_url = app.openapi_url

    @app.get(swagger.path, include_in_schema=False)
    async def swagger_ui_html():
        page = get_swagger_ui_html(
            openapi_url=openapi_url,
            title=f"{swagger.title} - Swagger UI",
            swagger_ui_parameters={"persistAuthorization": True},
        )
        html = page.body.decode("utf-8")
        if swagger.custom_stylesheet_path:
            html = with_stylesheet(html, swagger.custom_stylesheet_path)
        return HTMLResponse(html)
