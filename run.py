from league import create_app, db
from league.models import Bowler, Game, Prediction, SeriesPrediction, Week

app = create_app()


@app.shell_context_processor
def make_shell_context():
    return {
        "db": db,
        "Bowler": Bowler,
        "Week": Week,
        "Game": Game,
        "Prediction": Prediction,
        "SeriesPrediction": SeriesPrediction,
    }


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
