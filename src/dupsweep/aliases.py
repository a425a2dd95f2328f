from dupsweep.core.models import ReadErrorPolicy

READ_ERROR_ALIASES = {
    "abort": ReadErrorPolicy.ABORT,
    "skip": ReadErrorPolicy.SKIP,
}

READ_ERROR_CHOICES = list(READ_ERROR_ALIASES.keys())

READ_ERROR_HELP_TEXT = (
    "What to do when a file opens but fails while being read:\n"
    + "".join(
        f"  {alias:<6}: {policy.description}{' (default)' if policy is ReadErrorPolicy.ABORT else ''}\n"
        for alias, policy in READ_ERROR_ALIASES.items()
    )
    + "Files that cannot be opened at all are always reported and skipped."
)

EPILOG_TEXT = """
Examples:
  List duplicate sets under ~/Downloads (nothing is removed)
  %(prog)s --root ~/Downloads

  Delete the duplicates, keeping the file with the shortest path in each set
  %(prog)s --root ~/Downloads --delete

  Same as above, also removing directories emptied by the deletions
  %(prog)s --root ~/Downloads --delete --emptydir

  Move duplicates to the trash instead, hashing on 4 workers
  %(prog)s --root ~/Downloads --delete --trash --ncpu 4

  Large media library: prefilter by first 64 KiB, only files of 1MB or more
  %(prog)s --root /srv/media --prefilter --min-size 1M
"""
