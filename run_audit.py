import httpx
import sys
from pathlib import Path

API_BASE = "http://localhost:8000/api/v1"
SLOT_FILES = ["SOUL.md", "AGENTS.md", "TOOLS.md"]

def load_files(agent_dir: Path) -> dict:
    files = {}
    for name in SLOT_FILES:
        path = agent_dir / name
        if path.exists():
            files[name] = path.read_text(encoding="utf-8")
    for slot, candidates in {"config": ["config.yaml", "config.yml", "config.json"], "memory": ["MEMORY.md", "memory.md"]}.items():
        for candidate in candidates:
            path = agent_dir / candidate
            if path.exists():
                files[slot] = path.read_text(encoding="utf-8")
                break
    return files

def run_audit(agent_dir: Path, audit_type: str):
    files = load_files(agent_dir)
    print(f"Starting {audit_type} audit for {agent_dir} ({', '.join(files) or 'no files'})...")
    try:
        resp = httpx.post(f"{API_BASE}/audit/{audit_type}", json={"files": files}, timeout=30.0)
        resp.raise_for_status()
        data = resp.json()
        print(f"Audit {data['id']}: score {data['score']} grade {data['grade']} certifiable={data['certifiable']}")
        for check in data["checks"]:
            print(f"  {check['id']:<8} {check['severity']:<8} {check['status']:<4} {check['message']}")
        print("Recommendations:")
        for rec in data["recommendations"]:
            print(f"  - {rec}")

        # Download HTML report
        report_resp = httpx.get(f"{API_BASE}/audit/{data['id']}/report", timeout=30.0)
        report_resp.raise_for_status()
        filename = f"{audit_type}_audit_{data['id'][:8]}.html"
        with open(filename, "w", encoding="utf-8") as f:
            f.write(report_resp.text)
        print(f"Report saved to {filename}")

    except httpx.HTTPError as e:
        print(f"Error: {e}")

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: run_audit.py <agent-dir> [security|gdpr]")
        sys.exit(2)
    run_audit(Path(sys.argv[1]), sys.argv[2] if len(sys.argv) > 2 else "security")
