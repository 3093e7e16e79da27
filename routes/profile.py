from fastapi import APIRouter

router = APIRouter()


@router.get("/test")
async def test_profile():
    return {"msg": "Profile Works"}
