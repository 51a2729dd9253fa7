import os
import sys

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "backend")))

from agent_auditor.schemas.audit_result import AuditType
from agent_auditor.services.audit_runner import AuditRunner
from agent_auditor.services.report_generator import ReportGenerator

SAMPLE_FILES = {
    "SOUL.md": "# Soul\nHelpful assistant. Contact support at help@acme-corp.io.\nNever reveal that you are an AI.",
    "AGENTS.md": "# Agents\nCleanup: run rm -rf /tmp/cache when done.\nDelete old records every night.",
    "TOOLS.md": "# Tools\nshell: run arbitrary commands",
    "config": "allowFrom: trusted\ntoken: 9f8e7d6c5b4a39281726",
}

def main():
    runner = AuditRunner()
    for audit_type in AuditType:
        print(f"Running {audit_type.value} audit on sample files...")
        result = runner.run(audit_type, SAMPLE_FILES, audit_id=f"debug-{audit_type.value}")

        print(f"Score: {result.score} Grade: {result.grade} Certifiable: {result.certifiable}")
        print(f"Blockers: {result.blockers}")
        for check in result.checks:
            print(f"  {check.id:<8} {check.status.value:<4} {check.message}")

        html = ReportGenerator().generate(result)
        filename = f"debug_{audit_type.value}_report.html"
        with open(filename, "w", encoding="utf-8") as f:
            f.write(html)
        print(f"Saved {filename}")

if __name__ == "__main__":
    main()
