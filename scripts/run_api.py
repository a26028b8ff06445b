#!/usr/bin/env python
"""
API server entrypoint - starts the file QA service with Uvicorn.

Usage:
    python scripts/run_api.py
    python scripts/run_api.py --port 8080 --reload

The loaded context lives in process memory, so the server always runs a
single worker.
"""

import argparse


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='File QA API server')
    
    parser.add_argument(
        '--host',
        default='0.0.0.0',
        help='Host to bind to (default: 0.0.0.0)'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=8000,
        help='Port to bind to (default: 8000)'
    )
    parser.add_argument(
        '--reload',
        action='store_true',
        help='Enable auto-reload for development'
    )
    parser.add_argument(
        '--log-level',
        default='info',
        choices=['debug', 'info', 'warning', 'error'],
        help='Logging level (default: info)'
    )
    
    args = parser.parse_args()
    
    import uvicorn
    
    print(f"Starting File QA API on {args.host}:{args.port}")
    print(f"API Docs: http://{args.host if args.host != '0.0.0.0' else 'localhost'}:{args.port}/docs")
    
    uvicorn.run(
        "fileqa.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
        log_level=args.log_level
    )


if __name__ == '__main__':
    main()
