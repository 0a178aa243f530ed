from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routers import auth, diet_plans, profile, public, saved_recipes

app = FastAPI(title="PlateIQ API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with your specific domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(diet_plans.router)
app.include_router(saved_recipes.router)
app.include_router(public.router)


@app.get("/")
def read_root():
    return {"message": "Welcome to PlateIQ"}
