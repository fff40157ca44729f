import json
import logging
from flask import Flask, request, jsonify
from pydantic import ValidationError
from evaluator.config import DEBUG, LOG_FILE
from evaluator.exception import ProblemNotFoundError
from evaluator.models import EvaluationRequest
from evaluator.pipeline import EvaluationPipeline
from evaluator.problems import ProblemService

logging.basicConfig(
    filename=LOG_FILE,
    level=logging.DEBUG,
)
app = Flask(__name__)
if __name__ != "__main__":
    # let flask app use gunicorn's logger
    gunicorn_logger = logging.getLogger("gunicorn.error")
    app.logger.handlers = gunicorn_logger.handlers
    app.logger.setLevel(gunicorn_logger.level)
    logging.getLogger().setLevel(gunicorn_logger.level)

    # Allow overriding log level via environment variable
    if DEBUG:
        app.logger.setLevel(logging.DEBUG)
        logging.getLogger().setLevel(logging.DEBUG)
logger = app.logger

PROBLEMS = ProblemService()
PIPELINE = EvaluationPipeline()


@app.get("/api/problems")
def list_problems():
    try:
        problems = PROBLEMS.get_all_problems()
    except Exception as e:
        logger.error(f"Error fetching problems: {e}", exc_info=True)
        return jsonify({"message": "Failed to fetch problems"}), 500
    return jsonify([problem.public_view() for problem in problems])


@app.get("/api/problems/<int:problem_id>")
def get_problem(problem_id: int):
    try:
        problem = PROBLEMS.get_problem(problem_id)
    except ProblemNotFoundError:
        return jsonify({"message": "Problem not found"}), 404
    except Exception as e:
        logger.error(f"Error fetching problem: {e}", exc_info=True)
        return jsonify({"message": "Failed to fetch problem"}), 500
    return jsonify(problem.public_view())


@app.post("/api/evaluate")
def evaluate():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({
            "message": "Invalid request",
            "errors": ["request body must be a JSON object"],
        }), 400
    try:
        evaluation = EvaluationRequest.model_validate(payload)
    except ValidationError as e:
        return jsonify({
            "message": "Invalid request",
            "errors": json.loads(e.json(include_url=False)),
        }), 400

    try:
        problem = PROBLEMS.get_problem(evaluation.problemId)
    except ProblemNotFoundError:
        return jsonify({"message": "Problem not found"}), 404
    except Exception as e:
        logger.error(f"Error evaluating code: {e}", exc_info=True)
        return jsonify({"message": "Failed to evaluate code"}), 500

    logger.debug(
        f"evaluate submission for problem {problem.id} "
        f"({len(problem.testCases)} test cases)")
    result = PIPELINE.evaluate(
        evaluation.code,
        problem.testCases,
        filename=evaluation.filename,
    )
    return jsonify(result.to_response())


@app.get("/status")
def status():
    return jsonify({
        "status": "ok",
        "backend": PIPELINE.sandbox_config.get("backend"),
        "problemSource": PROBLEMS.source,
    }), 200


# for local debug
# if __name__ == "__main__":
#     app.run(host="0.0.0.0", port=5000, debug=True)
