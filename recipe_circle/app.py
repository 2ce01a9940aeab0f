# flake8: noqa

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Depends, Form, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import (
    HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse,
)
from sqlalchemy.orm import Session

from . import crud, export, query, schemas
from .config import get_config
from .db import SessionLocal, init_db
from .importer import ImportFormat, ParseFailure, parse


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize DB once at startup
    init_db()
    yield


app = FastAPI(title="Recipe Circle", lifespan=lifespan)

# Allow CORS for API clients (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_recipe_or_404(recipe_id: str, db: Session):
    r = crud.get_recipe(db, recipe_id)
    if not r:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return r


def link_header(request: Request, page: int, page_size: int, total: int) -> str:
    last = max(1, -(-total // page_size))
    links = []

    def url(p):
        return str(request.url.include_query_params(page=p, page_size=page_size))

    links.append(f'<{url(1)}>; rel="first"')
    if page > 1:
        links.append(f'<{url(page - 1)}>; rel="prev"')
    if page < last:
        links.append(f'<{url(page + 1)}>; rel="next"')
    links.append(f'<{url(last)}>; rel="last"')
    return ", ".join(links)


def form_recipe(
    title: str, ingredients: str, instructions: str, category: str,
    difficulty: str, cooking_time: int, prep_time: int, servings: int,
    notes: str, tags: str,
) -> schemas.RecipeCreate:
    # empty form inputs mean "not set"
    return schemas.RecipeCreate(
        title=title,
        ingredients=ingredients or None,
        instructions=instructions or None,
        category=category or None,
        difficulty=difficulty or None,
        cooking_time=cooking_time,
        prep_time=prep_time,
        servings=servings,
        notes=notes or None,
        tags=tags or None,
    )


# ---- HTML form endpoints ----

@app.get("/recipes/{recipe_id}", response_class=HTMLResponse)
def view_recipe(recipe_id: str, db: Session = Depends(get_db)):
    r = get_recipe_or_404(recipe_id, db)
    return HTMLResponse(content=export.html(r))


@app.post("/recipes")
def create_recipe_form(
    title: str = Form(...),
    ingredients: str = Form(""),
    instructions: str = Form(""),
    category: str = Form(""),
    difficulty: str = Form(""),
    cooking_time: int = Form(0, ge=0, le=schemas.MAX_COUNT),
    prep_time: int = Form(0, ge=0, le=schemas.MAX_COUNT),
    servings: int = Form(1, ge=0, le=schemas.MAX_COUNT),
    notes: str = Form(""),
    tags: str = Form(""),
    db: Session = Depends(get_db),
):
    recipe = form_recipe(
        title, ingredients, instructions, category, difficulty,
        cooking_time, prep_time, servings, notes, tags,
    )
    r = crud.create_recipe(db, recipe)
    return RedirectResponse(url=f"/recipes/{r.id}", status_code=303)


@app.post("/recipes/{recipe_id}/edit")
def edit_recipe_form(
    recipe_id: str,
    title: str = Form(...),
    ingredients: str = Form(""),
    instructions: str = Form(""),
    category: str = Form(""),
    difficulty: str = Form(""),
    cooking_time: int = Form(0, ge=0, le=schemas.MAX_COUNT),
    prep_time: int = Form(0, ge=0, le=schemas.MAX_COUNT),
    servings: int = Form(1, ge=0, le=schemas.MAX_COUNT),
    notes: str = Form(""),
    tags: str = Form(""),
    db: Session = Depends(get_db),
):
    recipe = form_recipe(
        title, ingredients, instructions, category, difficulty,
        cooking_time, prep_time, servings, notes, tags,
    )
    if not crud.update_recipe(db, recipe_id, recipe):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return RedirectResponse(url=f"/recipes/{recipe_id}", status_code=303)


@app.post("/recipes/{recipe_id}/delete")
def delete_recipe_form(recipe_id: str, db: Session = Depends(get_db)):
    if not crud.delete_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return RedirectResponse(url="/api/recipes", status_code=303)


# ---- JSON API ----

@app.get("/api/recipes", response_model=schemas.RecipePage)
def api_list_recipes(
    request: Request,
    response: Response,
    q: str = "",
    category: str = schemas.ALL,
    difficulty: str = schemas.ALL,
    sort: schemas.SortOption = schemas.SortOption.date_created,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    config = get_config()
    page_size = min(page_size or config.default_page_size, config.max_page_size)
    params = schemas.QueryParams(
        search_text=q, category=category, difficulty=difficulty, sort_option=sort,
    )
    results = query.query(crud.get_recipes(db), params)
    total = len(results)
    start = (page - 1) * page_size
    response.headers["Link"] = link_header(request, page, page_size, total)
    return {
        "items": [
            schemas.Recipe.model_validate(r)
            for r in results[start:start + page_size]
        ],
        "total": total,
        "page": page,
        "page_size": page_size,
    }


@app.post("/api/recipes", response_model=schemas.Recipe)
def api_create_recipe(recipe: schemas.RecipeCreate, db: Session = Depends(get_db)):
    return crud.create_recipe(db, recipe)


@app.get("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def api_get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    return get_recipe_or_404(recipe_id, db)


@app.put("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def api_update_recipe(
    recipe_id: str, recipe: schemas.RecipeCreate, db: Session = Depends(get_db)
):
    r = crud.update_recipe(db, recipe_id, recipe)
    if not r:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return r


@app.delete("/api/recipes/{recipe_id}")
def api_delete_recipe(recipe_id: str, db: Session = Depends(get_db)):
    if not crud.delete_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"deleted": True}


@app.post("/api/recipes/{recipe_id}/favorite", response_model=schemas.Recipe)
def api_toggle_favorite(recipe_id: str, db: Session = Depends(get_db)):
    r = crud.toggle_favorite(db, recipe_id)
    if not r:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return r


@app.get("/api/favorites", response_model=List[schemas.Recipe])
def api_favorites(q: str = "", db: Session = Depends(get_db)):
    return query.favorites(crud.get_recipes(db), search_text=q)


@app.get("/api/categories", response_model=List[schemas.CategorySummary])
def api_categories(db: Session = Depends(get_db)):
    return [
        {"name": name, "count": count}
        for name, count in query.category_summaries(crud.get_recipes(db))
    ]


@app.delete("/api/categories/{category}")
def api_remove_category(category: str, db: Session = Depends(get_db)):
    moved = crud.uncategorize(db, category)
    return {"category": category, "moved": moved}


@app.get("/api/difficulties", response_model=List[str])
def api_difficulties():
    return query.fixed_difficulties()


@app.get("/api/recipes/{recipe_id}/export")
def api_export_recipe(
    recipe_id: str,
    format: str = Query("text", pattern="^(text|html|json|sms)$"),
    db: Session = Depends(get_db),
):
    r = get_recipe_or_404(recipe_id, db)
    if format == "html":
        return HTMLResponse(content=export.format_recipe(r, export.ExportTarget.html))
    if format == "json":
        return JSONResponse(content=export.structured_record(r))
    if format == "sms":
        return PlainTextResponse(content=export.sms_text(r))
    return PlainTextResponse(content=export.format_recipe(r, export.ExportTarget.plain_text))


@app.post("/api/import", response_model=schemas.Recipe)
async def api_import_recipe(
    request: Request,
    format: ImportFormat = ImportFormat.json,
    db: Session = Depends(get_db),
):
    payload = await request.body()
    try:
        recipe = parse(payload, format)
    except ParseFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
    return crud.insert_recipe(db, recipe)
