from __future__ import annotations

from flask import Blueprint, abort, jsonify, request

from api.utils.helpers import json_body, page_meta, parse_pagination, services
from models.recipe import Difficulty, Recipe
from models.schemas.recipe import RecipeSchema
from models.user import Role
from utils.decorators import jwt_required, roles_required

bp = Blueprint("recipes", __name__)

recipe_schema = RecipeSchema()
recipes_schema = RecipeSchema(many=True)


@bp.post("/recipes")
@jwt_required()
def create_recipe():
    """
    Create a recipe; every ingredient item_id must exist
    ---
    tags: [Recipes]
    security:
      - Bearer: []
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, servings, prep_time, cook_time, ingredients, steps, difficulty]
          properties:
            name: { type: string }
            description: { type: string }
            servings: { type: integer, minimum: 1 }
            prep_time: { type: integer, minimum: 0 }
            cook_time: { type: integer, minimum: 0 }
            ingredients:
              type: array
              items:
                type: object
                required: [item_id, quantity, unit]
                properties:
                  item_id: { type: string }
                  quantity: { type: number }
                  unit: { type: string }
                  notes: { type: string }
            steps:
              type: array
              items:
                type: object
                required: [step_number, description]
                properties:
                  step_number: { type: integer, minimum: 1 }
                  description: { type: string }
                  duration: { type: integer, minimum: 0 }
            categories: { type: array, items: { type: string } }
            difficulty: { type: string, enum: [Easy, Medium, Hard] }
            image_url: { type: string }
            rating: { type: integer, minimum: 1, maximum: 5 }
            notes: { type: string }
    responses:
      201: { description: Created }
      400: { description: Validation error }
    """
    recipe = services()["recipes"].create(json_body())
    return jsonify({"data": recipe_schema.dump(recipe)}), 201


@bp.get("/recipes")
@jwt_required()
def list_recipes():
    """
    List recipes
    ---
    tags: [Recipes]
    security:
      - Bearer: []
    parameters:
      - in: query
        name: difficulty
        type: string
        enum: [Easy, Medium, Hard]
    responses:
      200: { description: OK }
    """
    repo = services()["recipes"]
    page, limit = parse_pagination()
    query = repo.query()
    difficulty = request.args.get("difficulty")
    if difficulty:
        try:
            query = query.filter(Recipe.difficulty == Difficulty(difficulty))
        except ValueError:
            abort(400, description="difficulty must be one of: Easy, Medium, Hard")
    rows, total = repo.list(query, page=page, limit=limit, order_by=(Recipe.name.asc(),))
    return jsonify({"data": recipes_schema.dump(rows), "meta": page_meta(page, limit, total)})


@bp.get("/recipes/<recipe_id>")
@jwt_required()
def get_recipe(recipe_id: str):
    """
    Get a recipe by id
    ---
    tags: [Recipes]
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify({"data": recipe_schema.dump(services()["recipes"].get(recipe_id))})


@bp.patch("/recipes/<recipe_id>")
@jwt_required()
def update_recipe(recipe_id: str):
    """
    Update a recipe (partial)
    ---
    tags: [Recipes]
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      400: { description: Validation error }
      404: { description: Not found }
    """
    recipe = services()["recipes"].update(recipe_id, json_body())
    return jsonify({"data": recipe_schema.dump(recipe)})


@bp.delete("/recipes/<recipe_id>")
@roles_required(Role.ADMIN)
def delete_recipe(recipe_id: str):
    """
    Delete a recipe - admin
    ---
    tags: [Recipes]
    security:
      - Bearer: []
    responses:
      204: { description: Deleted }
      404: { description: Not found }
    """
    services()["recipes"].delete(recipe_id)
    return ("", 204)
