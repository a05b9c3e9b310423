"""
Resume matching engine and command line front end.

Wires configuration, the embedder and the scorer together: resumes and
jobs are indexed (structured data, requirements, embeddings) and jobs are
matched against the processed resume pool.
"""
import argparse
import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from embeddings.embedder import create_embedder
from extractors.resume_parser import parse_resume_text
from scoring.scorer import MatchScorer
from scoring.search import extract_top_keywords, search_resumes
from utils.config import Config
from utils.logging_config import setup_logging
from utils.sanitizers import sanitize_filename
from utils.validators import (
    RESUME_STATUS_FAILED,
    RESUME_STATUS_PROCESSED,
    RESUME_STATUS_PROCESSING,
    select_rankable_resumes,
    validate_search_request,
    validate_top_n
)

logger = logging.getLogger(__name__)


def _job_embedding_text(description: str, skills_required: List[str]) -> str:
    return description + ' ' + ' '.join(skills_required)


class ResumeMatchingApp:
    """Index resumes and jobs, then rank resumes for a job."""

    def __init__(self, config: Optional[Config] = None, embedder=None):
        """
        Initialize application.

        Args:
            config: Configuration object, loaded from defaults if omitted
            embedder: Embedder instance, built from config if omitted
        """
        self.config = config or Config()
        self.embedder = embedder or create_embedder(self.config)
        self.scorer = MatchScorer(self.config)

    def process_resume(
        self,
        resume_id: str,
        text: Optional[str],
        filename: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build a resume record from decoded text.

        A resume without usable text is returned with status "failed" and an
        error message; it is never embedded or ranked.

        Args:
            resume_id: Resume identifier
            text: Plain text produced by the upstream document decoder
            filename: Original file name

        Returns:
            Resume record
        """
        resume = {
            'id': resume_id,
            'original_filename': sanitize_filename(filename or f"{resume_id}.txt"),
            'status': RESUME_STATUS_PROCESSING,
            'parsed_content': None,
            'extracted_data': {},
            'embedding': [],
            'processed_at': None,
            'error_message': None
        }

        try:
            parsed = parse_resume_text(text)
        except ValueError as e:
            logger.warning(f"Resume {resume_id} failed: {str(e)}")
            resume['status'] = RESUME_STATUS_FAILED
            resume['error_message'] = str(e)
            return resume

        resume['parsed_content'] = parsed['text']
        resume['extracted_data'] = parsed['extracted']
        resume['embedding'] = self.embedder.encode_text(parsed['text']).tolist()
        resume['status'] = RESUME_STATUS_PROCESSED
        resume['processed_at'] = datetime.now(timezone.utc).isoformat()

        logger.info(f"Processed resume {resume_id} ({len(parsed['text'])} chars)")
        return resume

    def create_job(
        self,
        job_id: str,
        title: str,
        description: str,
        skills_required: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Build a job record with extracted requirements and an embedding.

        Raises:
            ValueError: If the description is empty
        """
        if not description or not description.strip():
            raise ValueError("Job description is required")

        skills_required = list(skills_required or [])
        job = {
            'id': job_id,
            'title': title,
            'description': description,
            'skills_required': skills_required,
            'requirements': self.scorer.extract_requirements(description),
            'embedding': self.embedder.encode_text(
                _job_embedding_text(description, skills_required)
            ).tolist()
        }
        logger.info(f"Created job {job_id} with {len(job['requirements'])} extracted requirements")
        return job

    def update_job(
        self,
        job: Dict[str, Any],
        description: Optional[str] = None,
        skills_required: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """Return a copy of the job with requirements and embedding rebuilt."""
        updated = dict(job)
        if description is not None:
            updated['description'] = description
        if skills_required is not None:
            updated['skills_required'] = list(skills_required)

        if description is None and skills_required is None:
            return updated

        updated['requirements'] = self.scorer.extract_requirements(updated['description'])
        updated['embedding'] = self.embedder.encode_text(
            _job_embedding_text(updated['description'], updated.get('skills_required') or [])
        ).tolist()
        return updated

    def match_job(
        self,
        job: Dict[str, Any],
        resumes: List[Dict[str, Any]],
        top_n: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Rank processed resumes for a job.

        Args:
            job: Job record
            resumes: Resume pool; unprocessed and failed resumes are skipped
            top_n: Number of matches, defaults to config.default_top_n

        Returns:
            Ranked match results with a 1-based ``rank``

        Raises:
            ValueError: If top_n is out of range
        """
        if top_n is None:
            top_n = self.config.default_top_n

        is_valid, error = validate_top_n(top_n, self.config)
        if not is_valid:
            raise ValueError(error)

        candidates = select_rankable_resumes(resumes)
        if len(candidates) < len(resumes):
            logger.info(f"Skipping {len(resumes) - len(candidates)} resumes that are not rankable")
        if not candidates:
            return []

        results = self.scorer.rank_candidates(candidates, job, top_n=top_n)
        for idx, result in enumerate(results, 1):
            result['rank'] = idx
        return results

    def ask(
        self,
        resumes: List[Dict[str, Any]],
        query: str,
        k: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Search processed resumes for a phrase.

        Raises:
            ValueError: If the query or k is invalid
        """
        if k is None:
            k = self.config.default_search_results

        is_valid, error = validate_search_request(query, k, self.config)
        if not is_valid:
            raise ValueError(error)

        return search_resumes(resumes, query.strip(), k)

    def prepare_csv_export(self, results: List[Dict[str, Any]]) -> str:
        """Prepare CSV export."""
        export_rows = []
        for r in results:
            export_rows.append({
                'Rank': r.get('rank'),
                'Resume ID': r.get('resume_id'),
                'File Name': r.get('original_filename', ''),
                'Overall Score': r['score'],
                'Similarity': r['similarity'],
                'Match Ratio': r['match_ratio'],
                'Requirements Matched': len(r.get('evidence', {})),
                'Requirements Missing': len(r.get('missing_requirements', [])),
                'Matched Requirements': ', '.join(r.get('evidence', {})),
                'Missing Requirements': ', '.join(r.get('missing_requirements', [])),
                'Top Keywords': ', '.join(extract_top_keywords(r.get('parsed_content') or ''))
            })

        return pd.DataFrame(export_rows).to_csv(index=False)

    def prepare_json_export(self, results: List[Dict[str, Any]], job: Optional[Dict[str, Any]] = None) -> str:
        """Prepare JSON export."""
        export_data = {
            'timestamp': time.time(),
            'job_id': job.get('id') if job else None,
            'total_candidates': len(results),
            'results': []
        }

        for r in results:
            export_data['results'].append({
                'rank': r.get('rank'),
                'resume_id': r.get('resume_id'),
                'filename': r.get('original_filename'),
                'score': r['score'],
                'similarity': r['similarity'],
                'match_ratio': r['match_ratio'],
                'evidence': r.get('evidence', {}),
                'missing_requirements': r.get('missing_requirements', [])
            })

        return json.dumps(export_data, indent=2)

    def load_resume_directory(self, directory: str) -> List[Dict[str, Any]]:
        """Process every .txt file in a directory as a resume."""
        resumes = []
        for path in sorted(Path(directory).glob('*.txt')):
            text = path.read_text(encoding='utf-8', errors='ignore')
            resumes.append(self.process_resume(path.stem, text, filename=path.name))
        logger.info(f"Loaded {len(resumes)} resumes from {directory}")
        return resumes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank plain-text resumes against a job description.")
    parser.add_argument('--config', default='config.yaml', help="Path to config YAML file")
    subparsers = parser.add_subparsers(dest='command', required=True)

    match_parser = subparsers.add_parser('match', help="Rank resumes for a job")
    match_parser.add_argument('--job', required=True, help="File containing the job description")
    match_parser.add_argument('--title', default='', help="Job title")
    match_parser.add_argument('--skills', default='', help="Comma-separated declared skills")
    match_parser.add_argument('--resumes', required=True, help="Directory of .txt resumes")
    match_parser.add_argument('--top-n', type=int, default=None, help="Number of matches (1-50)")
    match_parser.add_argument('--format', choices=['csv', 'json'], default='json')
    match_parser.add_argument('--output', help="Write results here instead of stdout")

    ask_parser = subparsers.add_parser('ask', help="Search resumes for a phrase")
    ask_parser.add_argument('--query', required=True)
    ask_parser.add_argument('--resumes', required=True, help="Directory of .txt resumes")
    ask_parser.add_argument('-k', type=int, default=None, help="Number of results (1-20)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point."""
    args = build_parser().parse_args(argv)
    config = Config(args.config)
    setup_logging(config.log_level, stream=sys.stderr)

    try:
        app = ResumeMatchingApp(config)
        resumes = app.load_resume_directory(args.resumes)

        if args.command == 'ask':
            output = json.dumps({'results': app.ask(resumes, args.query, args.k)}, indent=2)
            print(output)
            return 0

        description = Path(args.job).read_text(encoding='utf-8')
        skills = [s.strip() for s in args.skills.split(',') if s.strip()]
        job = app.create_job(Path(args.job).stem, args.title, description, skills)
        results = app.match_job(job, resumes, args.top_n)

        if args.format == 'csv':
            output = app.prepare_csv_export(results)
        else:
            output = app.prepare_json_export(results, job)

        if args.output:
            Path(args.output).write_text(output, encoding='utf-8')
            logger.info(f"Wrote {len(results)} matches to {args.output}")
        else:
            print(output)
        return 0

    except (ValueError, OSError, RuntimeError) as e:
        logger.error(f"Matching failed: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
