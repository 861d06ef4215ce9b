"""
Main entry point for the course_downloader package.

Allows running the downloader as: python -m course_downloader
"""

from course_downloader.cli import main

if __name__ == "__main__":
    main()
