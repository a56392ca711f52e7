from django.core.management.base import BaseCommand

from tracker.services import StatsAggregator
from tracker.store import SessionStore


class Command(BaseCommand):
    help = "Print study hours against the goal for each level and combined."

    def handle(self, *args, **options):
        aggregator = StatsAggregator(SessionStore())
        for row in aggregator.progress():
            line = f"{row['label']}: {row['hours']:.1f}h / {row['goal_hours']:.0f}h ({row['percent']:.1f}% complete"
            if row["remaining_hours"] > 0:
                line += f", {row['remaining_hours']:.1f}h remaining)"
            else:
                line += ", goal reached)"
            self.stdout.write(line)
