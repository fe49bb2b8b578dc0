from __future__ import annotations

from typing import Dict, List

from .registry import get_api_functions, register_api


@register_api(
    "list_available_functions",
    description="List every registered API function with its description, category, and parameters.",
    category="meta",
    tags=("functions", "metadata"),
)
def list_available_functions() -> Dict[str, List[dict]]:
    functions = [
        {
            "name": func.name,
            "description": func.description,
            "category": func.category,
            "tags": list(func.tags),
            "parameters": func.parameters,
            "required": func.required,
        }
        for func in sorted(get_api_functions(), key=lambda item: item.name)
    ]
    return {"functions": functions}
