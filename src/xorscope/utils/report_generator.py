"""
Report Generation Module
Creates human-readable Markdown reports from analysis results
"""

from datetime import datetime
from typing import List


class ReportGenerator:
    """
    Generates Markdown reports from xorscope analysis results

    Sections appear only when the run produced them:
    - Single-byte XOR candidates
    - Key-length ranking
    - Recovered repeating key and plaintext
    - ECB scan results
    """

    def __init__(self, preview_length: int = 400):
        """
        Initialize report generator

        Args:
            preview_length: Maximum plaintext characters shown per result
        """
        self.preview_length = preview_length

    def generate_markdown(self, report, title: str = "Analysis") -> str:
        """
        Generate Markdown report

        Args:
            report: AnalysisReport object
            title: Report title

        Returns:
            Markdown formatted report as string
        """
        sections = [self._generate_header(title, report)]

        if report.single_byte:
            sections.append(self._generate_single_byte_section(report))
        if report.batch_single_byte:
            sections.append(self._generate_batch_section(report))
        if report.key_lengths:
            sections.append(self._generate_key_length_section(report))
        if report.repeating_key:
            sections.append(self._generate_repeating_key_section(report))
        if report.ecb_scans:
            sections.append(self._generate_ecb_section(report))
        if report.decrypted is not None:
            sections.append("## Decrypted Output\n\n" + self._code_block(report.decrypted))

        return "\n\n".join(sections) + "\n"

    def _generate_header(self, title: str, report) -> str:
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        lines = [
            f"# xorscope Report: {title}",
            "",
            f"**Generated:** {timestamp}  ",
            f"**Mode:** {report.mode}  ",
        ]
        if report.source:
            lines.append(f"**Input:** `{report.source}`  ")
        return "\n".join(lines)

    def _generate_single_byte_section(self, report) -> str:
        lines = [
            "## Single-Byte XOR Candidates",
            "",
            "| Rank | Key | Score | Preview |",
            "|------|-----|-------|---------|",
        ]
        for rank, result in enumerate(report.single_byte, 1):
            lines.append(
                f"| {rank} | `0x{result.key:02x}` | {result.score:.4f} | "
                f"{self._inline(result.plaintext, 50)} |"
            )
        lines.extend(["", "### Best Plaintext", "", self._code_block(report.single_byte[0].plaintext)])
        return "\n".join(lines)

    def _generate_batch_section(self, report) -> str:
        batch = report.batch_single_byte
        return "\n".join([
            "## Single-Byte XOR Search",
            "",
            f"- **Ciphertexts searched:** {batch.candidates}",
            f"- **Best match:** #{batch.index}",
            f"- **Key:** `0x{batch.result.key:02x}`",
            f"- **Score:** {batch.result.score:.4f}",
            "",
            self._code_block(batch.result.plaintext),
        ])

    def _generate_key_length_section(self, report) -> str:
        lines = [
            "## Key Length Ranking",
            "",
            "| Rank | Key Length | Normalized Distance |",
            "|------|------------|---------------------|",
        ]
        for rank, candidate in enumerate(report.key_lengths, 1):
            lines.append(f"| {rank} | {candidate.key_length} | {candidate.distance:.4f} |")
        return "\n".join(lines)

    def _generate_repeating_key_section(self, report) -> str:
        result = report.repeating_key
        lines = [
            "## Repeating-Key XOR",
            "",
            f"- **Key length:** {result.key_length}",
            f"- **Key:** `{self._inline(result.key, 80)}` (hex `{result.key.hex()}`)",
        ]
        if result.column_scores:
            weakest = min(range(len(result.column_scores)), key=lambda i: result.column_scores[i])
            lines.append(f"- **Weakest column:** {weakest} (score {result.column_scores[weakest]:.4f})")
        lines.extend(["", "### Plaintext", "", self._code_block(result.plaintext)])
        return "\n".join(lines)

    def _generate_ecb_section(self, report) -> str:
        flagged: List = [s for s in report.ecb_scans if s.is_ecb]
        lines = [
            "## ECB Detection",
            "",
            f"**{len(flagged)}** of {len(report.ecb_scans)} ciphertext(s) contain repeated blocks.",
        ]
        if flagged:
            lines.extend([
                "",
                "| Ciphertext | Length | Repeated Blocks |",
                "|------------|--------|-----------------|",
            ])
            for scan in flagged:
                lines.append(f"| #{scan.index} | {scan.ciphertext_length} | {scan.duplicate_blocks} |")
        return "\n".join(lines)

    def _code_block(self, data: bytes) -> str:
        text = data.decode('utf-8', errors='replace')
        if len(text) > self.preview_length:
            text = text[:self.preview_length] + "\n..."
        return f"```\n{text}\n```"

    @staticmethod
    def _inline(data: bytes, limit: int) -> str:
        text = data[:limit].decode('utf-8', errors='replace')
        # Keep table rows on one line
        return ''.join(c if c.isprintable() and c not in '|`' else '.' for c in text)
