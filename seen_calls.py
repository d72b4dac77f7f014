class SeenCalls:
    """cli_numbers already handled during this run. Never shrinks."""

    def __init__(self):
        self._seen = set()

    def seen(self, cli_number):
        return cli_number in self._seen

    def mark(self, cli_number):
        self._seen.add(cli_number)

    def __len__(self):
        return len(self._seen)

    def __contains__(self, cli_number):
        return self.seen(cli_number)
