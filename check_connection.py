# Connection check script: python check_connection.py

import asyncio
from motor.motor_asyncio import AsyncIOMotorClient
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

async def check_connection():
    mongodb_url = os.getenv('MONGODB_URL', 'mongodb://localhost:27017')
    database_name = os.getenv('DATABASE_NAME', 'songdb')
    collection_name = os.getenv('SONGS_COLLECTION', 'songs')

    print("=== Environment Variables ===")
    print(f"MONGODB_URL: '{mongodb_url}'")
    print(f"DATABASE_NAME: '{database_name}'")
    print("=" * 30)

    try:
        print(f"\nConnecting to: {mongodb_url}")
        client = AsyncIOMotorClient(mongodb_url, serverSelectionTimeoutMS=5000)

        await client.server_info()
        print("\n✅ Connection successful!")

        songs = client[database_name][collection_name]
        print(f"Songs in '{database_name}.{collection_name}': {await songs.count_documents({})}")

        client.close()

    except Exception as e:
        print(f"\n❌ Connection failed: {e}")
        print(f"Error type: {type(e)}")

if __name__ == "__main__":
    asyncio.run(check_connection())
