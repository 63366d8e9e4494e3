# campusflow/prompts/registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import json
from importlib import resources as importlib_resources
from pathlib import Path

import yaml
from campusflow.utils.templating import render_template

@dataclass(frozen=True)
class PromptTemplate:
    id: str
    version: str
    purpose: str
    template: str


def _packaged_dir() -> Path:
    return Path(str(importlib_resources.files("campusflow.prompts")))


class PromptRegistry:
    """
    Prompt templates (prompt_db.jsonl, one JSON object per line) and agent
    personas (system_messages.yaml) loaded lazily from a directory.
    """

    def __init__(self, base_dir: str | None = None):
        self.base_dir = Path(base_dir) if base_dir else _packaged_dir()
        self._system_map: Optional[Dict[str, str]] = None
        self._prompts: Optional[Dict[Tuple[str, str], PromptTemplate]] = None

    # --- System messages ---
    def get_system_message(self, agent: str) -> str:
        if self._system_map is None:
            with open(self.base_dir / "system_messages.yaml", "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            self._system_map = {str(k): (str(v) if v is not None else "") for k, v in data.items()}
        if agent not in self._system_map:
            agent = "default"
        return self._system_map.get(agent, "")

    # --- Prompt DB ---
    def _load_prompts(self) -> Dict[Tuple[str, str], PromptTemplate]:
        prompts: Dict[Tuple[str, str], PromptTemplate] = {}
        with open(self.base_dir / "prompt_db.jsonl", "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                obj = json.loads(line)
                tmpl = PromptTemplate(
                    id=obj["id"],
                    version=str(obj.get("version", "0.0.0")),
                    purpose=str(obj.get("purpose", "")),
                    template=str(obj["template"]),
                )
                prompts[(tmpl.id, tmpl.version)] = tmpl
        return prompts

    def get_prompt(self, prompt_id: str, version: str = "latest") -> PromptTemplate:
        if self._prompts is None:
            self._prompts = self._load_prompts()
        if version == "latest":
            versions = [v for (pid, v) in self._prompts.keys() if pid == prompt_id]
            if not versions:
                raise KeyError(f"Prompt not found: {prompt_id}")
            version = max(versions, key=_version_key)
        key = (prompt_id, version)
        if key not in self._prompts:
            raise KeyError(f"Prompt not found: {prompt_id}@{version}")
        return self._prompts[key]

    def render_prompt(self, prompt: PromptTemplate, data: Dict[str, Any]) -> str:
        return render_template(prompt.template, data)

    def render(self, prompt_id: str, data: Dict[str, Any], version: str = "latest") -> str:
        return self.render_prompt(self.get_prompt(prompt_id, version), data)


def _version_key(version: str) -> Tuple[Any, ...]:
    # "1.10.0" sorts after "1.9.0"; non-numeric parts compare as text
    return tuple((0, int(p)) if p.isdigit() else (1, p) for p in version.split("."))
